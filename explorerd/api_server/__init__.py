"""
API server package: HTTP interface of the explorer node.

Authenticates requests, decodes paths and bodies, and delegates to the
capabilities or the composite operations in explorerd.facade.
"""
