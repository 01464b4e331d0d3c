"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from tycoon_bank.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_risk_evaluation(
    request_id: str,
    credit_score: int,
    adjusted_rate: float,
    risk_tier: str,
    recommendation: str,
) -> None:
    """Log structured default-probability outcome"""
    logging.info(
        "Risk evaluation completed",
        extra={
            "request_id": request_id,
            "step": "risk_evaluation",
            "credit_score": credit_score,
            "adjusted_rate": adjusted_rate,
            "risk_tier": risk_tier,
            "recommendation": recommendation,
        },
    )


def log_simulation(
    request_id: str,
    loan_count: int,
    simulations: int,
    mean_loss: float,
    duration_ms: float,
) -> None:
    """Log structured portfolio simulation summary"""
    logging.info(
        "Portfolio simulation completed",
        extra={
            "request_id": request_id,
            "step": "portfolio_simulation",
            "loan_count": loan_count,
            "simulations": simulations,
            "mean_loss": mean_loss,
            "duration_ms": duration_ms,
        },
    )
