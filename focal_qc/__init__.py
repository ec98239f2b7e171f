"""focal_qc: focal-follow segment extraction and consistency checks for
behavioral observation workbooks."""

__version__ = "0.1.0"
