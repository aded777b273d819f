"""Optional integrations with third-party libraries.

Integrations are not imported automatically; import the integration module directly, e.g.
``from object_mapper.integration.pandas import map_frame``.
"""
