"""Errors surfaced to the user by the editor and workspace."""

from __future__ import annotations


class AcadeWriteError(Exception):
    """Base class for all acadewrite errors."""


class UserInputError(AcadeWriteError, ValueError):
    """A user-input problem. Recoverable by re-attempting the action."""


class SelectionRequiredError(UserInputError):
    pass


class SuggestionNotFoundError(UserInputError):
    pass


class StaleSelectionError(UserInputError):
    """The saved selection belongs to a document that has since been replaced."""


class UnsupportedFileError(UserInputError):
    pass


class InvalidTransitionError(AcadeWriteError):
    """An AI action popup operation was invoked from the wrong state."""
