"""tksctl - command-line client for the TKS cluster lifecycle service."""

__version__ = "0.1.0"
