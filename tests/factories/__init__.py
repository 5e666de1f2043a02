from tests.factories.payloads import (
    ClientCreateFactory,
    InvoiceCreateFactory,
    ProjectCreateFactory,
    TaskCreateFactory,
    TransactionCreateFactory,
)

__all__ = [
    "ClientCreateFactory",
    "InvoiceCreateFactory",
    "ProjectCreateFactory",
    "TaskCreateFactory",
    "TransactionCreateFactory",
]
