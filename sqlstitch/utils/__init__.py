from sqlstitch.utils import logging, records, type_guards

__all__ = ("logging", "records", "type_guards")
