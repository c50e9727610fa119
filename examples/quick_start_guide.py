#!/usr/bin/env python3
"""
Quick Start Guide for XLIFF Repair.

Repairs a damaged translation file in memory, shows the per-line change
records, and packages the cleaned output.
"""

import sys
import tempfile
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from xliff_repair import RepairConfig, package_results, repair_text, summarize
from xliff_repair.character.control import visualize_control_chars

DAMAGED_XLIFF = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<xliff version="1.2">\n'
    '  <file original="ui" source-language="en" target-language="de">\n'
    '    <body>\n'
    '      <trans-unit id=welcome>\n'
    '        <source>Save <50% on Tom & Jerry\x00</source>\n'
    '        <target state="translated"xml:lang="de">Spare <50%</target>\n'
    '      </trans-unit>\n'
    '    </body>\n'
    '  </file>\n'
    '</xliff>\n'
)


def quick_start_example():
    """Repair one document and print what changed."""

    print("🚀 QUICK START - XLIFF Repair")
    print("=" * 45)

    print("\n🔧 Step 1: Repairing Document")
    print("-" * 30)

    result = repair_text("messages.de.xlf", DAMAGED_XLIFF)

    print(f"Status: {result.status.value}")
    print(f"Fixes applied: {result.total_fix_count}")
    print(f"Changed lines: {result.changed_line_count}")

    print("\n📝 Step 2: Change Records")
    print("-" * 30)

    for change in result.changes:
        print(f"Line {change.line_number} ({change.fix_count} fixes)")
        print(f"  - {visualize_control_chars(change.original_content)}")
        print(f"  + {change.cleaned_content}")

    print("\n⚖️  Step 3: Status Policies")
    print("-" * 30)

    truncated = "<body>\n  <source>Fish & Chips</source>\n"
    strict = repair_text("truncated.xlf", truncated)
    lenient = repair_text("truncated.xlf", truncated, config=RepairConfig.reference())
    print(f"Strict policy:      {strict.status.value} ({strict.error_message})")
    print(f"Fixes-first policy: {lenient.status.value}")

    print("\n📦 Step 4: Packaging")
    print("-" * 30)

    results = [result, strict]
    stats = summarize(results)
    print(f"Batch: {stats.total} files, {stats.fixed} fixed, {stats.error} errors")

    with tempfile.TemporaryDirectory() as output_dir:
        package = package_results(results, output_dir)
        print(f"Wrote {package.path.name} with entries: {', '.join(package.entry_names)}")


if __name__ == "__main__":
    quick_start_example()
