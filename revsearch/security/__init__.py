"""Security module -- engine page hostname checks."""

from revsearch.security.hostnames import get_valid_hostname

__all__ = ["get_valid_hostname"]
