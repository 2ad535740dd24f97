"""Chart type definitions, palettes and code generation.

Every chart the studio offers is a declarative `ChartTypeDefinition`. This
package holds the schema, the built-in definitions, the palette interpolator,
the configuration state manager, and the script/preview generators. It has no
Django dependency so it can be exercised directly by unit tests.
"""
