"""Exporters: IFC files and plan images."""

from massing_builder.export.ifc import IFCExporter, export_ifc
from massing_builder.export.plan import render_footprint

__all__ = ["IFCExporter", "export_ifc", "render_footprint"]
