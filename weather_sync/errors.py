class PipelineError(Exception):
    """Base class for failures of a single fetch -> transform -> send run."""


class FetchError(PipelineError):
    """Upstream weather request failed or its body could not be decoded."""


class SinkError(PipelineError):
    """Downstream insert failed in transport or returned a non-2xx status."""
