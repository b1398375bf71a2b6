"""Utility package exports."""

from .text import is_nick_first_char, redact_line, split_privmsg, split_whitespace_indices

__all__ = ["is_nick_first_char", "redact_line", "split_privmsg", "split_whitespace_indices"]
