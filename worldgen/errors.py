"""
Failure taxonomy for the generation pipeline.

All of these are recovered inside WorldGenerationPipeline; callers only ever
see a generated record or a fallback record.
"""


class GenerationError(Exception):
    """Base class for recoverable generation failures"""


class TransportFailure(GenerationError):
    """The generation client rejected, timed out, or returned no content"""


class ExtractionFailure(GenerationError):
    """No JSON value could be recovered from the model output"""


class SchemaFailure(GenerationError):
    """The extracted object cannot be normalized into a valid record"""
