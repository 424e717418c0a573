"""Custom exceptions. Every layer raises a subclass of ChesserError, so callers can catch the whole family at once."""


class ChesserError(Exception):
    """Top-level exception for the board synchronization system."""


# --- configuration ---
class InvalidConfigError(ChesserError):
    """Declarative block (or plugin settings) could not be interpreted."""


class InvalidPositionError(InvalidConfigError):
    """FEN or PGN could not be loaded into the rules engine."""


# --- rules ---
class IllegalMoveError(ChesserError):
    pass


# --- move history ---
class HistoryError(ChesserError):
    """Misuse of the move ledger."""


class ReplayModeError(HistoryError):
    """A new move was offered while an earlier position of the game is displayed."""


# --- persistence ---
class PersistenceError(ChesserError):
    """Store unreadable/unwritable. Always caught by the controller, never fatal."""


class HostUnavailableError(PersistenceError):
    """The document/editor that holds the declarative block cannot be reached."""


class SourceParseError(PersistenceError):
    """The current text of the declarative block is not a valid mapping anymore."""
