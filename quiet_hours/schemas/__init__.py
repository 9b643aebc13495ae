"""Pydantic schemas for the Quiet Hours API."""

from quiet_hours.schemas.base import *
from quiet_hours.schemas.auth import *
from quiet_hours.schemas.place import *
from quiet_hours.schemas.booking import *
from quiet_hours.schemas.favorite import *
