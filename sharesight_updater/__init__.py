"""Sharesight custom investment price updater.

Authenticates with the Sharesight API using OAuth2 client credentials, lists
custom investments, submits prices for them and scrapes reference prices from
public fund data feeds.
"""

__version__ = "0.1.0"
