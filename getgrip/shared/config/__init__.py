"""
Shared Config Module
====================

YAML configuration files read by ``getgrip.shared.core.configuration``.

Structure:
- settings/defaults.yaml: shipped system defaults
- settings/user.yaml, settings/project.yaml: optional local overrides
"""
