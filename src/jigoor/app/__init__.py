"""Session state and wiring for the signal desk."""

from .config import AppConfig, DataSource
from .factory import create_session
from .session import SearchTicket, SignalDeskSession

__all__ = ["AppConfig", "DataSource", "SearchTicket", "SignalDeskSession", "create_session"]
