"""Schema management for the storefront's SQL databases.

Under the default (memory) configuration there is nothing to create. The
``production`` overlay points the default database at PostgreSQL, where every
aggregate gets a table and every child entity (addresses, product images and
tags, cart and order items) gets its own table with a foreign key to its parent.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for provider in domain.providers.values():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield provider


def _register_tables(domain: Domain) -> None:
    """Touch each repository's DAO so its model is bound to its provider's metadata."""
    records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
    for record in records:
        domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create the tables of every storefront aggregate and entity."""
    with domain.domain_context():
        _register_tables(domain)
        for provider in _sql_providers(domain):
            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain) -> None:
    """Drop every storefront table. Used by ``manage.py drop-db`` and the test session teardown."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
