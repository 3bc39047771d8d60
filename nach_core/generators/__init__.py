"""Sample data generators."""

from nach_core.generators.batch_file import BatchFileGenerator, SampleFile

__all__ = ["BatchFileGenerator", "SampleFile"]
