"""ComplianceIQ dynamic assessment composition and readiness scoring."""

__version__ = "0.1.0"
