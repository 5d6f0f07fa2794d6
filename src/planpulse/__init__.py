"""
PlanPulse - Planning insights engine

This package contains the PlanPulse backend services:
- engine: Rule-based scoring (risks, predictions, assignment, workload,
  deadline sweeps, productivity metrics)
- api: FastAPI adapter exposing the engine to the web backend
- platform: Cross-cutting concerns (configuration, logging)
"""

__version__ = "0.1.0"
