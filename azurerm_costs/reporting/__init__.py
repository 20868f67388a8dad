from .tables import render_resource_table, resources_to_json

__all__ = ["render_resource_table", "resources_to_json"]
