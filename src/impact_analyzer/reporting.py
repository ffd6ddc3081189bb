"""Report rendering for analysis results.

Renders an ``AnalysisResult`` as JSON, a Markdown report, or a compact
pull-request comment, and writes the requested formats to disk.
"""

from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from impact_analyzer.models.results import TOOL_NAME, AnalysisResult

REPORT_FILENAMES = {
    "json": "impact.json",
    "markdown": "impact.md",
    "github": "github-comment.md",
}


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def render_json(result: AnalysisResult) -> str:
    """Serialize the full result as indented JSON."""
    return result.model_dump_json(indent=2)


def render_markdown(result: AnalysisResult) -> str:
    """Render the full Markdown report."""
    summary = result.summary
    lines = [
        "# Impact Analysis Report",
        "",
        f"**Generated:** {result.meta.timestamp.isoformat()}",
        f"**Base:** `{result.meta.base_ref}`",
        f"**Head:** `{result.meta.head_ref}`",
        "",
        "## Summary",
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Total Changed Files | {summary.total_changed_files} |",
        f"| Total Impacted Components | {summary.total_impacted_components} |",
        f"| Breaking Changes | {_yes_no(summary.has_breaking_changes)} |",
        "",
        "## Per-Repository Summary",
        "",
        "| Repository | Changed Files | Impacted Components |",
        "|------------|---------------|---------------------|",
    ]
    lines.extend(f"| {r.name} | {r.changed_files} | {r.impact_count} |" for r in summary.repos)
    lines.extend(["", "## Detailed Impacts", ""])

    for repo in result.repos:
        if repo.errors:
            lines.extend([f"### {repo.name} (errors)", ""])
            lines.extend(f"- {error}" for error in repo.errors)
            lines.append("")

        if not repo.impacts:
            continue

        lines.extend([f"### {repo.name}", ""])
        for impact in repo.impacts:
            lines.extend([f"#### {impact.component}", "", f"- **File:** `{impact.file}`"])
            if impact.reasons:
                lines.append("- **Reasons:**")
                lines.extend(f"  - [{r.type}] {r.description}" for r in impact.reasons)
            if impact.test_hints:
                lines.append("- **Test hints:**")
                lines.extend(f"  - {hint}" for hint in impact.test_hints)
            lines.append("")

    if result.cross_repo_impacts:
        lines.extend(
            [
                "## Cross-Repository Impacts",
                "",
                "These changes may affect other repositories:",
                "",
            ]
        )
        for cross in result.cross_repo_impacts:
            lines.extend(
                [
                    f"### {cross.source_repo} -> {cross.target_repo}",
                    "",
                    f"- **Relation:** {cross.relation}",
                    f"- **Source:** {cross.source_component}",
                    "- **Potentially affected components:**",
                ]
            )
            lines.extend(f"  - {target}" for target in cross.target_components)
            lines.append("")

    return "\n".join(lines) + "\n"


def render_github_comment(result: AnalysisResult) -> str:
    """Render a collapsed summary suitable for a pull request comment."""
    summary = result.summary
    lines = [
        "## Impact Analysis",
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Changed Files | {summary.total_changed_files} |",
        f"| Impacted Components | {summary.total_impacted_components} |",
        f"| Breaking Changes | {_yes_no(summary.has_breaking_changes)} |",
        "",
    ]

    if summary.total_impacted_components == 0:
        lines.append("**No component impacts detected.**")
        return "\n".join(lines) + "\n"

    lines.extend(
        [
            "<details>",
            f"<summary>Impacted Components ({summary.total_impacted_components})</summary>",
            "",
        ]
    )
    for repo in result.repos:
        if not repo.impacts:
            continue
        lines.extend([f"### {repo.name}", ""])
        for impact in repo.impacts:
            lines.append(f"- **{impact.component}** (`{impact.file}`)")
            lines.extend(f"  - {r.description}" for r in impact.reasons)
        lines.append("")
    lines.extend(["</details>", ""])

    if result.cross_repo_impacts:
        lines.extend(
            [
                "<details>",
                f"<summary>Cross-Repository Impacts ({len(result.cross_repo_impacts)})</summary>",
                "",
            ]
        )
        for cross in result.cross_repo_impacts:
            lines.extend(
                [
                    f"#### {cross.source_repo} -> {cross.target_repo}",
                    "",
                    f"- **Via:** {cross.relation}",
                    f"- **Source:** {cross.source_component}",
                    f"- **May affect:** {', '.join(cross.target_components)}",
                    "",
                ]
            )
        lines.extend(["</details>", ""])

    lines.extend(["---", f"*Generated by {TOOL_NAME} v{result.meta.version}*"])
    return "\n".join(lines) + "\n"


_RENDERERS = {
    "json": render_json,
    "markdown": render_markdown,
    "github": render_github_comment,
}


def write_reports(result: AnalysisResult, directory: Path, formats: Iterable[str]) -> list[Path]:
    """
    Write the requested report formats into a directory.

    Args:
        result: Analysis result to render.
        directory: Output directory, created if missing.
        formats: Any of ``json``, ``markdown``, ``github``.

    Returns:
        Paths of the written files, in request order.

    Raises:
        ValueError: If a format is unknown.
    """
    requested = list(dict.fromkeys(formats))
    unknown = [f for f in requested if f not in _RENDERERS]
    if unknown:
        raise ValueError(f"Unknown output format(s): {', '.join(unknown)}")

    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    for fmt in requested:
        path = directory / REPORT_FILENAMES[fmt]
        path.write_text(_RENDERERS[fmt](result), encoding="utf-8")
        logger.debug("Wrote {} report to {}", fmt, path)
        written.append(path)

    return written
