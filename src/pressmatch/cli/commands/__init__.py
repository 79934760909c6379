# ABOUTME: Subcommands of the pressmatch CLI, one module per command.
# ABOUTME: Each module exposes a click command registered on the root group.
