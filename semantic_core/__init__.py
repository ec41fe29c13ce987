# Path: semantic_core/__init__.py
# Purpose: Package initializer for the semantic tagging and captioning core.
# Layer: core.
# Details: Aggregates subpackages for encoders, label indexes, tagging, captioning, prompting, and orchestration.
