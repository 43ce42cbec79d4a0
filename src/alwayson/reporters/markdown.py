"""MarkdownReporter — Markdown report generator."""

from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003

from alwayson.core.exceptions import ReporterError
from alwayson.core.models import ScriptResult, StepResult
from alwayson.reporters.base import BaseReporter


class MarkdownReporter(BaseReporter):
    """Generate Markdown + JSON reports from script results."""

    @property
    def format_name(self) -> str:
        """Report format name."""
        return "markdown"

    async def generate(
        self,
        results: list[ScriptResult],
        output_dir: Path,
    ) -> Path:
        """Generate report files in output_dir.

        Creates:
            - report.md  (human-readable)
            - summary.json (machine-readable)

        Returns:
            Path to report.md.
        """
        try:
            output_dir.mkdir(parents=True, exist_ok=True)

            report_path = output_dir / "report.md"
            summary_path = output_dir / "summary.json"

            report_path.write_text(self._render_report(results), encoding="utf-8")
            summary_path.write_text(
                json.dumps(self._build_summary(results), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )

            return report_path

        except Exception as exc:
            if isinstance(exc, ReporterError):
                raise
            msg = f"Report generation failed: {exc}"
            raise ReporterError(msg) from exc

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    def _render_report(self, results: list[ScriptResult]) -> str:
        passed = sum(1 for r in results if r.passed)
        lines = [
            "# Display Script Report",
            "",
            f"**Status:** {'PASS' if passed == len(results) else 'FAIL'}",
            f"**Scripts:** {passed}/{len(results)} passed",
            "",
        ]
        for result in results:
            lines.extend(self._render_script(result))
        return "\n".join(lines)

    def _render_script(self, result: ScriptResult) -> list[str]:
        timestamp = result.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        lines = [
            f"## {result.script_id}: {result.script_name}",
            "",
            f"**Status:** {'PASS' if result.passed else 'FAIL'}",
            f"**Timestamp:** {timestamp}",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Total Steps | {result.total_steps} |",
            f"| Passed | {result.passed_steps} |",
            f"| Failed | {result.failed_steps} |",
            "",
            "| Step | Action | Status | Time | Mode | Draws | Description |",
            "|------|--------|--------|------|------|-------|-------------|",
        ]
        lines.extend(self._render_step(step) for step in result.steps)
        lines.append("")

        if result.final_state:
            state = result.final_state
            lines.append(
                f"**Final display:** `{state.time_text}` at {state.instant_ms}, "
                f"{state.mode_label}, draw count {state.draw_count}"
            )
            lines.append("")
        return lines

    def _render_step(self, step: StepResult) -> str:
        error_note = f" ({step.error_message})" if step.error_message else ""
        if step.state:
            time_text = step.state.time_text
            mode = step.state.mode.value
            draws = str(step.state.draw_count)
        else:
            time_text = mode = draws = "-"
        return (
            f"| {step.step} | {step.action.value} | {step.status.value} "
            f"| {time_text} | {mode} | {draws} | {step.description}{error_note} |"
        )

    # ------------------------------------------------------------------
    # Summary JSON builder
    # ------------------------------------------------------------------

    def _build_summary(self, results: list[ScriptResult]) -> dict[str, object]:
        """Build machine-readable summary dict."""
        return {
            "passed": all(r.passed for r in results),
            "total_scripts": len(results),
            "passed_scripts": sum(1 for r in results if r.passed),
            "scripts": [
                {
                    "id": r.script_id,
                    "passed": r.passed,
                    "total_steps": r.total_steps,
                    "passed_steps": r.passed_steps,
                    "failed_steps": r.failed_steps,
                    "final_draw_count": r.final_state.draw_count if r.final_state else None,
                }
                for r in results
            ],
        }
