"""
fsmstudio - Payment lifecycle workflow (FSM) modelling toolkit.

Subpackages:
- spec: workflow model, lint, preset merge, FSM YAML import/export
- diagram: phase classification and swimlane layout
- config: classifier tables, reference catalog, built-in presets
- validator: lint issue collection
- tools: command line entry points
"""

__version__ = "0.1.0"
