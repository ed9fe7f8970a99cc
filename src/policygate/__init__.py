"""policygate — classified-outcome gateway over device administration backends."""

__version__ = "0.1.0"
