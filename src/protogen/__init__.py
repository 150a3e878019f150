"""
protogen - Prototype Surface Generator

Generates SwiftUI source text for three derived surfaces of a record-like
type declaration:

    - <Model>Form          editable surface bound to an instance
    - <Model>SettingsView  editable surface backed by persisted storage
    - <Model>View          read-only display surface

ARCHITECTURAL GUARANTEE:
------------------------
The generation core (model, resolver, sections, assemblers) contains ZERO
knowledge of target syntax. It produces a structured intermediate
representation only.

All text comes from a backend.
The SwiftUI backend consumes the intermediate representation unchanged.
"""

__version__ = "0.1.0"
