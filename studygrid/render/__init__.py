"""Rendering backends for PlannerDocument (raster, PDF, HTML)."""
