# agent_dialogs/errors.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Coded error model for the dialogs package.

Every error raised by the package is built from an ``ErrorDefinition``:
a stable numeric code, a templated description and a help link. The
exception message has the form ``[<code>] - <description> - <helplink>``
so that both humans and tests can match on it.
"""

from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict

DEFAULT_HELP_LINK = "https://aka.ms/M365AgentsErrorCodesJS/#{errorCode}"


class ErrorDefinition(BaseModel):
    """A stable, machine-matchable error description.

    Attributes:
        code: Negative numeric code, unique across the package.
        description: Message template; ``{name}`` placeholders are filled
            from the params passed when the exception is generated.
        helplink: Link template; ``{errorCode}`` is replaced by the code.
    """

    model_config = ConfigDict(frozen=True)

    code: int
    description: str
    helplink: str = DEFAULT_HELP_LINK

    def format(self, **params: Any) -> str:
        """Substitute params into the description template."""
        description = self.description
        for key, value in params.items():
            description = description.replace(f"{{{key}}}", str(value))
        return description

    @property
    def help_link(self) -> str:
        return self.helplink.replace("{errorCode}", str(self.code))


class AgentError(Exception):
    """Base class for every coded error raised by the package.

    Attributes:
        definition: The ErrorDefinition this error was built from.
        code: Numeric error code (copied from the definition).
        help_link: Rendered help link.
        params: Template parameters used for the message.
        inner_exception: Optional underlying cause.
    """

    def __init__(
        self,
        definition: ErrorDefinition,
        params: Optional[dict[str, Any]] = None,
        inner_exception: Optional[BaseException] = None,
    ):
        self.definition = definition
        self.code = definition.code
        self.help_link = definition.help_link
        self.params = dict(params or {})
        self.inner_exception = inner_exception
        self.description = definition.format(**self.params)
        super().__init__(f"[{self.code}] - {self.description} - {self.help_link}")


class DialogConfigurationError(AgentError):
    """Raised for misconfiguration: unknown or duplicate scopes, invalid dialogs."""


class MemoryBindingError(AgentError):
    """Raised when a memory scope cannot bind to a backing object for a write."""


class PathError(AgentError, ValueError):
    """Raised for malformed, unresolvable or unwritable path expressions."""


class RecognizerError(AgentError, ValueError):
    """Raised for structurally invalid recognizer input."""


class StorageError(AgentError):
    """Raised by storage providers."""


class Errors:
    """Every error definition raised by the package, keyed by name."""

    EMPTY_RECOGNIZER_RESULT = ErrorDefinition(
        code=-130006,
        description="result is empty",
    )

    PATH_NOT_SPECIFIED = ErrorDefinition(
        code=-130008,
        description="DialogStateManager.setValue: path wasn't specified.",
    )

    SCOPE_NOT_FOUND = ErrorDefinition(
        code=-130009,
        description="DialogStateManager.setValue: a scope of '{scope}' wasn't found.",
    )

    NEGATIVE_INDEX_NOT_ALLOWED = ErrorDefinition(
        code=-130010,
        description=(
            "DialogStateManager.setValue: unable to update value for '{path}'. "
            "Negative indexes aren't allowed."
        ),
    )

    UNABLE_TO_UPDATE_VALUE = ErrorDefinition(
        code=-130011,
        description="DialogStateManager.setValue: unable to update value for '{path}'.",
    )

    INVALID_DELETE_PATH = ErrorDefinition(
        code=-130012,
        description="DialogStateManager.deleteValue: invalid path of '{path}'.",
    )

    SCOPE_NOT_FOUND_FOR_DELETE = ErrorDefinition(
        code=-130013,
        description="DialogStateManager.deleteValue: a scope of '{scope}' wasn't found.",
    )

    INVALID_PATH_CHARACTERS = ErrorDefinition(
        code=-130014,
        description="DialogStateManager: path '{path}' contains invalid characters.",
    )

    PATH_RESOLUTION_FAILED = ErrorDefinition(
        code=-130015,
        description="DialogStateManager: unable to resolve path '{path}'.",
    )

    INVALID_DIALOG_BEING_ADDED = ErrorDefinition(
        code=-130016,
        description="DialogSet.add(): Invalid dialog being added.",
    )

    ON_COMPUTE_ID_NOT_IMPLEMENTED = ErrorDefinition(
        code=-130020,
        description="Dialog.onComputeId(): not implemented.",
    )

    STATE_KEY_NOT_AVAILABLE = ErrorDefinition(
        code=-130022,
        description="{stateKey} is not available.",
    )

    CANNOT_REPLACE_ROOT_AGENT_STATE = ErrorDefinition(
        code=-130023,
        description="You cannot replace the root AgentState object.",
    )

    UNDEFINED_MEMORY_OBJECT = ErrorDefinition(
        code=-130024,
        description="{scopeName}.setMemory: undefined memory object passed in.",
    )

    ACTIVE_DIALOG_UNDEFINED = ErrorDefinition(
        code=-130025,
        description="DialogMemoryScope: activeDialog is undefined.",
    )

    MEMORY_SCOPE_OPERATION_NOT_SUPPORTED = ErrorDefinition(
        code=-130026,
        description="{scopeName}: {operation} is not supported.",
    )

    DUPLICATE_MEMORY_SCOPE = ErrorDefinition(
        code=-130029,
        description="DialogStateManager: a scope named '{scope}' is already registered.",
    )

    STORAGE_KEYS_REQUIRED = ErrorDefinition(
        code=-130030,
        description="Storage: keys are required when {operation}.",
    )

    ETAG_CONFLICT = ErrorDefinition(
        code=-130031,
        description="Storage: error writing '{key}' due to eTag conflict.",
    )

    @classmethod
    def all(cls) -> dict[str, ErrorDefinition]:
        """Return every definition keyed by its attribute name."""
        return {
            name: value
            for name, value in vars(cls).items()
            if isinstance(value, ErrorDefinition)
        }


E = TypeVar("E", bound=AgentError)


def generate_exception(
    error_type: Type[E],
    definition: ErrorDefinition,
    inner_exception: Optional[BaseException] = None,
    params: Optional[dict[str, Any]] = None,
) -> E:
    """Build a typed, coded exception from an error definition.

    Args:
        error_type: AgentError subclass to instantiate.
        definition: The error definition.
        inner_exception: Optional underlying cause.
        params: Values substituted into the description template.

    Returns:
        The exception instance, ready to raise.
    """
    return error_type(definition, params=params, inner_exception=inner_exception)
