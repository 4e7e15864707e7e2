# =============================================================================
# core/__init__.py
# =============================================================================
# Everything the currency tools actually do: settings, the Frankfurter HTTP
# client, argument validation, rendering, truncation and the five tool
# operations.
#
# RULE: nothing in this package imports FastMCP or Google ADK.  The only
# third-party import is pydantic (argument schemas).  tools/ and agent/ sit
# on top of core/, never the other way round.
# =============================================================================
