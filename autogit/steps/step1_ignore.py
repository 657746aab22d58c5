"""Step 1: Ignore file reconciliation.

Offers the canonical ignore rules that are not yet in the repository's ignore
file and writes whichever the user picks. Running it twice in a row reports
the file as up to date the second time.
"""

from pathlib import Path

from loguru import logger

from autogit.models.config import IgnoreConfig
from autogit.models.workflow import IgnoreResult
from autogit.utils.console import error, info, success, warning
from autogit.utils.prompts import Prompter


async def run_step1(config: IgnoreConfig, repo_root: Path, prompter: Prompter) -> IgnoreResult:
    """Execute Step 1: Reconcile the ignore file with the canonical rules.

    Args:
        config: Step 1 configuration
        repo_root: Repository root holding the ignore file
        prompter: Prompt collaborator

    Returns:
        IgnoreResult describing what was offered and written
    """
    logger.info("Starting Step 1: Ignore file reconciliation")

    ignore_path = Path(repo_root) / config.file_name
    file_existed = ignore_path.exists()

    try:
        if file_existed:
            existing = read_ignore_rules(ignore_path)
        else:
            create = prompter.confirm(
                f"No {config.file_name} file found. Would you like to create one?",
                default=True,
            )
            # Nothing is written until rules are actually chosen below
            logger.info(f"{config.file_name} missing, create confirmed: {create}")
            existing = []

        missing = compute_missing_rules(config.canonical_rules, existing)

        if not missing:
            info(f"{config.file_name} is already up to date.")
            logger.info("Step 1 completed: ignore file already up to date")
            return IgnoreResult(
                success=True,
                ignore_file=ignore_path,
                file_existed=file_existed,
                already_up_to_date=True,
            )

        selected = prompter.checkbox(f"Select files to add to {config.file_name}:", missing)

        if not selected:
            warning(f"No new entries were added to {config.file_name}.")
            logger.info("Step 1 completed: no rules selected")
            return IgnoreResult(
                success=True,
                ignore_file=ignore_path,
                file_existed=file_existed,
                missing_rules=missing,
            )

        write_ignore_rules(ignore_path, selected, append=file_existed)

        if file_existed:
            success(f"Updated {config.file_name}.")
        else:
            success(f"Created {config.file_name} with selected entries.")
        logger.info(f"Step 1 completed: added {selected} to {ignore_path}")

        return IgnoreResult(
            success=True,
            ignore_file=ignore_path,
            file_existed=file_existed,
            file_created=not file_existed,
            missing_rules=missing,
            rules_added=selected,
        )

    except OSError as e:
        error_msg = f"Failed to update {config.file_name}: {e}"
        logger.error(error_msg, exc_info=True)
        error(error_msg)
        return IgnoreResult(
            success=False,
            ignore_file=ignore_path,
            file_existed=file_existed,
            errors=[error_msg],
        )


def read_ignore_rules(ignore_path: Path) -> list[str]:
    """Read non-empty rules from an ignore file, in file order.

    Trailing whitespace (including a CR from CRLF files) is dropped because
    git ignores it as well.
    """
    content = ignore_path.read_text(encoding="utf-8")
    return [line.rstrip() for line in content.split("\n") if line.strip()]


def compute_missing_rules(canonical: list[str], existing: list[str]) -> list[str]:
    """Return canonical rules not present in existing, in canonical order.

    Args:
        canonical: Built-in rule list (duplicates are collapsed)
        existing: Rules already in the file

    Returns:
        Ordered set difference canonical - existing
    """
    present = set(existing)
    missing: list[str] = []
    for rule in canonical:
        if rule not in present:
            missing.append(rule)
            present.add(rule)
    return missing


def write_ignore_rules(ignore_path: Path, rules: list[str], append: bool) -> None:
    """Write rules to the ignore file.

    A new file contains exactly the rules, newline-joined. An existing file
    gets a newline followed by the rules appended, leaving prior content as is.
    """
    content = "\n".join(rules)
    if append:
        with open(ignore_path, "a", encoding="utf-8") as f:
            f.write(f"\n{content}")
    else:
        with open(ignore_path, "w", encoding="utf-8") as f:
            f.write(content)
