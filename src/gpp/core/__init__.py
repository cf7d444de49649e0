# topmark:header:start
#
#   project      : GPP
#   file         : __init__.py
#   file_relpath : src/gpp/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Processing engine: context, directives, substitution and the stream driver."""
