"""Kernel – error hierarchy and clock shared by every logroute layer."""
