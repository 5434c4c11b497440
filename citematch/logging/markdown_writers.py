"""
Markdown formatting for run audit logs.
"""


def write_run_summary_markdown(f, tag: str, ts: str, payload: dict):
    """Write markdown for a citation matching run."""
    f.write(f"# {tag}  {ts}\n\n")

    f.write("## Inputs\n\n")
    f.write(f"- **Reporters File**: `{payload.get('reporters_file', 'N/A')}`  \n")
    f.write(f"- **Document Directory**: `{payload.get('directory', 'N/A')}`  \n")
    f.write(f"- **Read Error Policy**: {payload.get('on_read_error', 'N/A')}  \n\n")

    f.write("## Summary\n\n")
    f.write(f"- **Files Scanned**: {payload.get('files_scanned', 0)}  \n")
    f.write(f"- **Files With Citations**: {payload.get('files_with_citations', 0)}  \n")
    f.write(f"- **Matched Rows**: {payload.get('matched_rows', 0)}  \n")
    f.write(f"- **Unmatched Rows**: {payload.get('unmatched_rows', 0)}  \n")
    f.write(f"- **Failed Row Writes**: {payload.get('failed_rows', 0)}  \n")
    f.write(f"- **Duration**: {payload.get('duration_seconds', 'N/A')} s  \n\n")

    f.write("## Outputs\n\n")
    f.write(f"- `{payload.get('matched_output', 'N/A')}`  \n")
    f.write(f"- `{payload.get('unmatched_output', 'N/A')}`  \n\n")

    skipped = payload.get("skipped", [])
    if skipped:
        f.write("## Skipped Files\n\n")
        for item in skipped:
            f.write(f"- `{item.get('filename')}`  \n")
            f.write(f"  - **Reason**: {item.get('reason')}  \n")
        f.write("\n")
