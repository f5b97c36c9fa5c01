"""Custom exceptions for the SQL snippet parameter tool"""


class SqlParamError(Exception):
    """Base exception for all sqlparam errors"""
    pass


class ConfigurationError(SqlParamError):
    """Raised when there's an issue with configuration"""
    pass


class SubstitutionError(SqlParamError):
    """Raised when a targeted substitution cannot locate its literal"""
    pass


class ValidationError(SqlParamError):
    """Raised when input validation fails"""
    pass


class SnippetFileError(SqlParamError):
    """Raised when a snippet file cannot be read or written"""
    pass
