from sqlstitch.dataset._base import Dataset
from sqlstitch.dataset.delete import Delete
from sqlstitch.dataset.insert import Insert
from sqlstitch.dataset.select import Select
from sqlstitch.dataset.truncate import Truncate
from sqlstitch.dataset.update import Update

__all__ = ("Dataset", "Delete", "Insert", "Select", "Truncate", "Update")
