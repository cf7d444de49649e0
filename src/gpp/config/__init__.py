# topmark:header:start
#
#   project      : GPP
#   file         : __init__.py
#   file_relpath : src/gpp/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for GPP.

- `gpp.config.logging`: logger class, TRACE level and log setup.
- `gpp.config.io`: TOML loading and value getters (tomlkit).
- `gpp.config.model`: the immutable `Config` and its `MutableConfig` builder.

Submodules are imported directly; this module re-exports nothing.
"""
