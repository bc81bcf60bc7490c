"""Exception hierarchy for batch runs."""


class LighthouseBatchError(Exception):
    """Base class for errors raised by lighthouse_batch."""


class MalformedReport(LighthouseBatchError):
    """The engine produced a report without usable category scores."""


class UrlListError(LighthouseBatchError):
    """The URL list file could not be read."""


class ConfigError(LighthouseBatchError):
    """Options or the config file are invalid."""


class EngineNotFound(LighthouseBatchError):
    """The audit engine executable could not be started."""
