# ABOUTME: pressmatch identifies the exact release of a scanned vinyl or CD pressing.
# ABOUTME: Top-level package; see pressmatch.core.workflow for the scan lifecycle.
