"""Pipeline provisioning."""

from __future__ import annotations

from .service import (
    PipelineProvisioner,
    ProvisioningResult,
    WebhookAction,
    WebhookSync,
    provision_pipeline,
)

__all__ = [
    "PipelineProvisioner",
    "ProvisioningResult",
    "WebhookAction",
    "WebhookSync",
    "provision_pipeline",
]
