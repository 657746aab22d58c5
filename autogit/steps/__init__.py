"""Workflow steps, run in order by `autogit.main.run_workflow`."""
