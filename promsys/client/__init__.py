from .api import (
    ApiClient,
    ApiError,
    ApiResponse,
    ClientError,
    TransportError,
    UploadFile,
)
from .app import DashboardClient
from .query import QueryClient, QueryObserver, make_key
from .session import AuthProvider, AuthState, RoleGuard, SessionUser, auth_guard
from .toasts import Toast, Toaster, ToastKind
from .workflows import (
    InvoiceActions,
    KanbanBoard,
    PaymentOutcome,
    ReimbursementActions,
    TaskActions,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiResponse",
    "AuthProvider",
    "AuthState",
    "ClientError",
    "DashboardClient",
    "InvoiceActions",
    "KanbanBoard",
    "PaymentOutcome",
    "QueryClient",
    "QueryObserver",
    "ReimbursementActions",
    "RoleGuard",
    "SessionUser",
    "TaskActions",
    "Toast",
    "ToastKind",
    "Toaster",
    "TransportError",
    "UploadFile",
    "auth_guard",
    "make_key",
]
