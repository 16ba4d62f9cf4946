"""
Invocation-name dispatch: qualifier parsing, option blending and routing.
"""
