"""State/merge layer.

This package is the single source of truth for how an incoming asset record
is reconciled with the stored asset: scalar fields through a pluggable
policy, telemetry through deduplicated append.
"""
