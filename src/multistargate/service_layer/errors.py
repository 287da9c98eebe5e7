"""Service-layer error definitions."""

# ============================================================================
#                           Registration errors
# ============================================================================


class RegistrationError(Exception):
    """Base class for errors raised while building an application registry."""


class DuplicateApplicationError(RegistrationError):
    """Raised when two applications share the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Application {name!r} is already registered.")
        self.name = name


class NamespaceCollisionError(RegistrationError):
    """Raised when two applications would persist their state under one namespace."""

    def __init__(self, namespace: str, application: str, existing: str) -> None:
        super().__init__(
            f"Namespace {namespace!r} of {application!r} is already used by {existing!r}."
        )
        self.namespace = namespace
        self.application = application
        self.existing = existing


class TypeUrlCollisionError(RegistrationError):
    """Raised when a type URL is claimed by more than one application."""

    def __init__(self, type_url: str, application: str, existing: str) -> None:
        super().__init__(
            f"Duplicated type_url among applications: {type_url} "
            f"(claimed by {application!r}, already owned by {existing!r})"
        )
        self.type_url = type_url
        self.application = application
        self.existing = existing


# ============================================================================
#                             Routing errors
# ============================================================================


class RoutingError(Exception):
    """Base class for errors raised while routing a call to an application."""


class NoApplicationForTypeUrl(RoutingError, LookupError):
    """Raised when no registered application owns a type URL."""

    def __init__(self, type_url: str, kind: str = "message") -> None:
        super().__init__(f"Application not found for {kind} type_url: {type_url}")
        self.type_url = type_url
        self.kind = kind


class UnknownApplicationError(RoutingError, LookupError):
    """Raised when looking up an application name that was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No application registered under {name!r}")
        self.name = name


class UnknownTypeUrlError(RoutingError):
    """Raised by an application handed a type URL it does not recognize."""

    def __init__(self, application: str, type_url: str) -> None:
        super().__init__(f"Application {application!r} does not handle {type_url}")
        self.application = application
        self.type_url = type_url


class ReentrantDispatchError(RoutingError):
    """Raised when a nested call targets an application that is still executing."""

    def __init__(self, application: str, type_url: str) -> None:
        super().__init__(
            f"Re-entrant dispatch of {type_url} into application {application!r}"
        )
        self.application = application
        self.type_url = type_url


# ============================================================================
#                              State errors
# ============================================================================


class StateDecodeError(Exception):
    """Raised when persisted application state cannot be decoded."""

    def __init__(self, namespace: str, reason: str) -> None:
        super().__init__(f"Cannot decode state of namespace {namespace!r}: {reason}")
        self.namespace = namespace
        self.reason = reason
