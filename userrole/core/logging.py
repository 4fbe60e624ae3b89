"""Logging configuration and utilities."""
import logging
import sys
from typing import Any, Dict

import structlog
from structlog.stdlib import LoggerFactory

from ..config import settings


def configure_logging(log_level: str = None):
    """Configure structured logging."""

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard logging
    level = (log_level or settings.monitoring.log_level).upper()
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )

    # Set third-party log levels
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class RequestLogger:
    """Request logging utility."""

    @staticmethod
    def log_request(
        method: str,
        path: str,
        request_id: str = None,
        extra_data: Dict[str, Any] = None
    ):
        """Log incoming request."""
        logger = structlog.get_logger("api.request")
        logger.info(
            "Request started",
            method=method,
            path=path,
            request_id=request_id,
            **(extra_data or {})
        )

    @staticmethod
    def log_response(
        method: str,
        path: str,
        status_code: int,
        response_time_ms: float,
        user_id: str = None,
        request_id: str = None,
    ):
        """Log response."""
        logger = structlog.get_logger("api.response")
        logger.info(
            "Request completed",
            method=method,
            path=path,
            status_code=status_code,
            response_time_ms=response_time_ms,
            user_id=user_id,
            request_id=request_id,
        )

    @staticmethod
    def log_error(
        method: str,
        path: str,
        status_code: int,
        error_code: str,
        message: str,
        request_id: str = None,
        exc_info: bool = False,
    ):
        """Log a failed request."""
        logger = structlog.get_logger("api.error")
        log = logger.error if status_code >= 500 else logger.info
        log(
            "Request failed",
            method=method,
            path=path,
            status_code=status_code,
            error_code=error_code,
            error=message,
            request_id=request_id,
            exc_info=exc_info,
        )


class BusinessLogger:
    """Account event logging utility."""

    @staticmethod
    def log_user_signed_up(user_id: str, user_name: str, role_id: str = None):
        """Log account creation."""
        logger = structlog.get_logger("business.account")
        logger.info(
            "User signed up",
            event_type="user_signed_up",
            user_id=user_id,
            user_name=user_name,
            role_id=role_id,
        )

    @staticmethod
    def log_user_signed_out(user_id: str):
        """Log session revocation."""
        logger = structlog.get_logger("business.account")
        logger.info("User signed out", event_type="user_signed_out", user_id=user_id)

    @staticmethod
    def log_authorize_status_changed(user_id: str, authorize: bool, changed_by: str):
        logger = structlog.get_logger("business.account")
        logger.info(
            "Authorize status changed",
            event_type="authorize_status_changed",
            user_id=user_id,
            authorize=authorize,
            changed_by=changed_by,
        )

    @staticmethod
    def log_role_created(role_id: str, name: str, created_by: str):
        logger = structlog.get_logger("business.role")
        logger.info(
            "Role created",
            event_type="role_created",
            role_id=role_id,
            name=name,
            created_by=created_by,
        )


class SecurityLogger:
    """Security event logging utility."""

    @staticmethod
    def log_login_attempt(
        user_name: str,
        success: bool,
        ip_address: str = None,
        user_agent: str = None,
        failure_reason: str = None
    ):
        """Log login attempt."""
        logger = structlog.get_logger("security.auth")
        logger.info(
            "Login attempt",
            event_type="login_attempt",
            user_name=user_name,
            success=success,
            ip_address=ip_address,
            user_agent=user_agent,
            failure_reason=failure_reason
        )

    @staticmethod
    def log_unauthorized_access(
        path: str,
        method: str,
        ip_address: str = None,
        user_agent: str = None,
        reason: str = None
    ):
        """Log unauthorized access attempt."""
        logger = structlog.get_logger("security.access")
        logger.warning(
            "Unauthorized access attempt",
            event_type="unauthorized_access",
            path=path,
            method=method,
            ip_address=ip_address,
            user_agent=user_agent,
            reason=reason
        )
