"""Domain layer for churchbooks application."""

# Services import the database interface, which imports entities from this
# package; resolve them lazily so importing entities never cycles back.
_SERVICES = {
    "BookService": "churchbooks.domain.books",
    "CategoryService": "churchbooks.domain.category",
    "ChurchService": "churchbooks.domain.church",
    "LedgerService": "churchbooks.domain.ledger",
    "YearService": "churchbooks.domain.year",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
