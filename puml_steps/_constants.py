"""Common literal values used across puml_steps.

These constants keep filenames and diagram boundaries centralized so the
generators, the index builder, and tests can import the same values without
drifting. Intended for internal use within the puml_steps package.

Examples
--------
>>> from puml_steps import _constants
>>> _constants.DECK_META_TEMPLATE.format(key="login-flow")
'.puml-steps-login-flow-meta.json'
>>> _constants.STEP_FILE_TEMPLATE.format(number=3, slug="dashboard")
'step-03-dashboard'
"""

DECK_META_TEMPLATE = ".puml-steps-{key}-meta.json"
STEP_FILE_TEMPLATE = "step-{number:02d}-{slug}"
SUMMARY_STEM = "summary"
VIEWER_FILENAME = "index.html"
PUML_PREAMBLE = "@startuml"
PUML_POSTAMBLE = "@enduml"
