"""Tenant Installer package.

One-shot installer for a multi-tenant, plugin-based application. It
collects operator configuration, provisions the master tenant and its
super user, installs content plugins and compiles the front end, running
everything as an ordered, fail-fast pipeline with rollback.

Package Structure
-----------------
- `configuration/`:
    Prompt schema, interactive collector and persistence of the resolved
    configuration (``.env`` and ``conf/config.json``).
- `provisioning/`:
    Collaborator capabilities, runtime discovery, tenant and super-user
    provisioning and the rollback.
- `pipeline/`:
    Step definitions, the sequential executor, run state, framework
    download and the build subprocess runner.
- `backends/`:
    Reference collaborators (SQLAlchemy store, local auth, framework
    content plugins).
- `ui/`:
    Rich output and Questionary prompts.
- `config.py`: All configuration constants (paths, URLs, commands), as UPPER_SNAKE_CASE.
- `exceptions.py`: The installer exception hierarchy.

Run the installer through the launcher (``installer.py``) or the
``tenant-install`` console script.
"""
