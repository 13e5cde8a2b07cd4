"""termshell: an in-process command shell with pipelines, completion and interactive prompts."""

__version__ = "0.1.0"
