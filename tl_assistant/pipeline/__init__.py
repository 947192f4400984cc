from tl_assistant.pipeline.context import ConversionContext
from tl_assistant.pipeline.pipeline import ConversionPipeline
from tl_assistant.pipeline.step import PipelineStep

__all__ = ["ConversionContext", "ConversionPipeline", "PipelineStep"]
