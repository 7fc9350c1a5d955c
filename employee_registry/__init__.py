"""
Employee registry: identity records, field-level update permissions and
the change audit trail.
"""
