"""
Target emitters.

Each subpackage renders one output stack: ``react`` (frontend), ``sql``
(schema scripts), ``express`` and ``dotnet`` (backend APIs).
"""
