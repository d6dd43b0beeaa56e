"""Shop check-in service.

Feature packages (checkins, network, reports, ...) sit behind a thin Flask
controller layer; services depend on repository protocols, not on MySQL.
"""
