class CompactionError(Exception):
    """Base class for every fatal error raised by the compaction pipeline."""


class InputError(CompactionError):
    """Input path missing, unreadable, or not decodable into the expected schema."""


class InvariantViolation(CompactionError):
    """A header-only genesis header commits to transactions, receipts, uncles or withdrawals."""


class StoreIOError(CompactionError):
    """Stat, read, compress or write of a bytecode artifact or descriptor failed."""


class ConfigurationError(CompactionError):
    """A required option is missing or options contradict each other."""
