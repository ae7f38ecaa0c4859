"""Core of the crawler: configuration, domain, contracts and services.

The core does not open sockets itself; it talks to the network through the
`AdsTxtTransport` contract implemented in `adstxt.adapters`.
"""
