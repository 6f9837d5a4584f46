"""Driver handle protocols and adapters."""

from sqlconduit.driver._common import CommonConnectionAttributesMixin
from sqlconduit.driver._protocols import DriverHandle, DriverStatement
from sqlconduit.driver.dbapi import DBAPIHandle, DBAPIStatement

__all__ = (
    "CommonConnectionAttributesMixin",
    "DBAPIHandle",
    "DBAPIStatement",
    "DriverHandle",
    "DriverStatement",
)
