"""Package boundary for the install pipeline.

Holds the step definitions, the sequential executor, the run state and the
helpers the steps use (framework download, build runner, status table).
The package itself is intentionally lightweight and does not contain logic.

Examples
--------
>>> from tenant_installer.pipeline.executor import InstallPipeline
>>> from tenant_installer.pipeline.steps import STEPS
>>> [name for name, _ in STEPS][0]
'framework-fetch'
"""
