"""DartQL - query language for selecting Dart tasks."""

__version__ = "0.1.0"
