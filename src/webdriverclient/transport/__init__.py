"""Transport collaborator: one JSON request in, one status + body out."""

from .http_transport import HTTPResponse, HTTPTransport, Transport, TransportFailure

__all__ = ["HTTPResponse", "HTTPTransport", "Transport", "TransportFailure"]
