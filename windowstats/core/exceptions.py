"""
Custom exceptions for the windowed metrics system
"""


class WindowStatsError(Exception):
    """Base exception for windowed metrics errors"""


class ConfigurationError(WindowStatsError):
    """Configuration related errors"""


class InvalidConfiguration(ConfigurationError):
    """Aggregator constructed with an unusable window or sample cap"""
