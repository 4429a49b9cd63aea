"""Launch pipeline for the gallery runtime.

This package turns a catalog project into a running terminal or IDE:

- **resolver**: Tag resolution (request override + project defaults -> ResolvedLaunch / IDETagInfo)
- **renderer**: Command rendering (ResolvedLaunch -> one chained shell command, per dialect)
- **executor**: Process spawning (command -> detached terminal / IDE / file manager)
"""
