"""Declarative chart configuration and rendering helpers.

The weather chart is driven by a `ChartConfig` object rather than bespoke view
logic. This package contains the schema, builder, validation, Chart.js
serialization and the render-hook contracts (crosshair overlay).
"""
