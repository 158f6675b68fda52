"""Error classes raised while scanning images and writing reports."""


class GeotagReportError(Exception):
    """Base class for all geotag_report errors"""
    pass


class ConfigurationError(GeotagReportError):
    """Invalid configuration file or option values"""
    pass


class TraversalError(GeotagReportError):
    """The directory walk cannot proceed; no report is written"""
    pass


class ExtractionError(GeotagReportError):
    """A single file could not be turned into a record.

    The aggregator logs these and moves on to the next file.
    """

    def __init__(self, path, message: str):
        self.path = str(path)
        super().__init__(message)


class FileReadError(ExtractionError):
    """File could not be opened or read"""
    pass


class NoMetadataError(ExtractionError):
    """Image carries no EXIF block"""
    pass


class MetadataDecodeError(ExtractionError):
    """Bytes are not a recognised image or the EXIF block is malformed"""
    pass


class TagFlattenError(ExtractionError):
    """Decoded EXIF could not be flattened into tags"""
    pass


class ReportWriteError(GeotagReportError):
    """A report file could not be written"""
    pass
