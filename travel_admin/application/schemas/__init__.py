from .catalogue import AgencyCreate, FlightCreate, HotelCreate, PackageCreate, ServiceCreate
from .client import ClientCreate, ClientUpdate
from .result import OperationResult, SearchPartition
from .user import UserCreate, UserUpdate

__all__ = [
    "AgencyCreate",
    "FlightCreate",
    "HotelCreate",
    "PackageCreate",
    "ServiceCreate",
    "ClientCreate",
    "ClientUpdate",
    "OperationResult",
    "SearchPartition",
    "UserCreate",
    "UserUpdate",
]
