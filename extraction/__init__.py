from .pipeline import IngestionResult, Upload, parse_wholesale_file

__all__ = ["IngestionResult", "Upload", "parse_wholesale_file"]
