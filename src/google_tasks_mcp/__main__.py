from google_tasks_mcp.main import cli

cli()
