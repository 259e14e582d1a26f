from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings

from .constants import MAX_TEXT_PAYLOAD, TRUNCATION_MARKER, UNREADABLE_TEXT


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    log_level: str = Field("INFO", description="Level for xmpptrace loggers")

    # Payload handling
    unreadable_text: str = Field(
        UNREADABLE_TEXT, description="Placeholder for payloads that are not text"
    )
    max_text_payload: int = Field(
        MAX_TEXT_PAYLOAD, description="Longest dump payload kept before truncating"
    )
    truncation_marker: str = Field(
        TRUNCATION_MARKER, description="Appended to truncated dump payloads"
    )

    # xmppdump text format
    dump_record_prefix: str = Field("tcp", description="Record type of dump headers")
    dump_encoding: str = Field("utf-8", description="Encoding of dump files")
    dump_errors: str = Field(
        "replace", description="Codec error handler for undecodable dump bytes"
    )

    # Source selection
    pcap_suffixes: List[str] = Field(
        default_factory=lambda: [".pcap", ".cap"],
        description="File suffixes always read as binary captures",
    )
    sniff_bytes: int = Field(4, description="Bytes read to sniff a file's format")

    class Config:
        env_prefix = "XMPPTRACE_"
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    """Return a singleton settings instance."""
    return Settings()


settings = get_settings()
