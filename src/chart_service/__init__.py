"""
Chart Conversion Service package.

Converts Vega and Vega-Lite chart specifications to SVG, HTML, PNG, JPEG,
PDF, or compiled Vega. The FastAPI application lives in
``chart_service.webapi``.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
