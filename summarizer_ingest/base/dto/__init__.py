"""DTO validation package for stream requests."""

from .chat import CredentialsDTO, MessageDTO, Role, StreamRequestDTO

__all__ = ["Role", "MessageDTO", "StreamRequestDTO", "CredentialsDTO"]
