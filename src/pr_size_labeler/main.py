"""CLI entrypoint for PR Size Labeler."""

import argparse
import base64
import os
import sys
import time
from pathlib import Path
from typing import Any

from pr_size_labeler.build_info import BuildInfo
from pr_size_labeler.config import DEFAULT_CONFIG_PATH, load_config
from pr_size_labeler.github_client import GitHubClient
from pr_size_labeler.output.console import print_results
from pr_size_labeler.sizing import classify, reconcile

PULL_REQUEST_EVENTS = {"pull_request", "pull_request_target"}


class LabelerError(Exception):
    """A labeling step failed; ``action`` names the step."""

    def __init__(self, action: str, cause: Exception):
        super().__init__(f"Error {action}: {cause}")
        self.action = action
        self.cause = cause


def is_pull_request_event(event_name: str) -> bool:
    """Check if the triggering event is a pull request event."""
    return event_name.lower() in PULL_REQUEST_EVENTS


def is_valid_repo_format(repo: str) -> bool:
    """Check the repository is given as 'owner/repo'."""
    parts = repo.split("/")
    return len(parts) == 2 and all(parts)


def run_labeler(
    repo: str,
    pr_number: int,
    github_client: GitHubClient,
    config_path: Path | None,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Size the PR and bring its size labels up to date.

    Returns dict with results of the run.

    Raises:
        LabelerError: If loading config, fetching data or applying labels fails.
    """
    start_time = time.time()

    try:
        config = load_config(config_path or Path(DEFAULT_CONFIG_PATH))
    except Exception as e:
        raise LabelerError("loading configuration", e) from e

    owner, repo_name = repo.split("/")

    try:
        files = github_client.fetch_changed_files(owner, repo_name, pr_number)
    except Exception as e:
        raise LabelerError("fetching pull request files", e) from e

    try:
        classification = classify(files, config)
    except Exception as e:
        raise LabelerError("sizing pull request", e) from e

    try:
        current_labels = github_client.fetch_labels(owner, repo_name, pr_number)
    except Exception as e:
        raise LabelerError("fetching pull request labels", e) from e

    plan = reconcile(config.label_configs, classification.winner, current_labels)

    if not dry_run and not plan.is_empty:
        try:
            github_client.apply_plan(owner, repo_name, pr_number, plan)
        except Exception as e:
            raise LabelerError("updating pull request labels", e) from e

    print_results(repo, pr_number, classification, plan, dry_run)

    return {
        "pr_number": pr_number,
        "repo": repo,
        "files_counted": classification.counts.files,
        "lines_counted": classification.counts.lines,
        "size": classification.winner.name,
        "labels_added": sorted(plan.to_add),
        "labels_removed": sorted(plan.to_remove),
        "dry_run": dry_run,
        "duration_ms": int((time.time() - start_time) * 1000),
    }


def _decode_private_key(value: str) -> str:
    """Accept a raw PEM key (possibly with escaped newlines) or a base64-encoded one."""
    value = value.strip()
    if "-----BEGIN" in value:
        return value.replace("\\n", "\n")
    return base64.b64decode(value).decode("utf-8")


def _create_client(enterprise_url: str | None) -> GitHubClient | None:
    """Create a GitHub client, preferring App credentials over a token."""
    app_id = os.environ.get("GITHUB_APP_ID")
    app_installation_id = os.environ.get("GITHUB_APP_INSTALLATION_ID")
    app_private_key_b64 = os.environ.get("GITHUB_APP_PRIVATE_KEY_BASE64")
    github_token = os.environ.get("GITHUB_TOKEN")

    if app_id and app_installation_id and app_private_key_b64:
        return GitHubClient.from_app_credentials(
            app_id,
            app_installation_id,
            _decode_private_key(app_private_key_b64),
            base_url=enterprise_url,
        )
    if github_token:
        return GitHubClient(github_token, base_url=enterprise_url)
    return None


def main(build_info: BuildInfo | None = None) -> int:
    """Main entry point."""
    from dotenv import load_dotenv
    load_dotenv()

    build_info = build_info or BuildInfo.collect()

    parser = argparse.ArgumentParser(
        description="Label pull requests by the size of their changes",
        prog="pr-size-labeler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        default=os.environ.get("CONFIG_FILE_PATH") or DEFAULT_CONFIG_PATH,
        help=f"Config file path (default: $CONFIG_FILE_PATH or {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the label changes without applying them",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=build_info.format(),
    )

    args = parser.parse_args()

    missing = [
        name
        for name in ("GITHUB_EVENT_NAME", "PULL_REQUEST_NUMBER", "GITHUB_REPOSITORY")
        if not os.environ.get(name)
    ]
    if missing:
        print(
            f"Error: environment variable(s) required: {', '.join(missing)}",
            file=sys.stderr,
        )
        return 1

    event_name = os.environ["GITHUB_EVENT_NAME"]
    repo = os.environ["GITHUB_REPOSITORY"]

    if not is_pull_request_event(event_name):
        print("Event is not a valid pull request event, doing nothing")
        return 0

    if not is_valid_repo_format(repo):
        print("Repository name is in the wrong format. Expected 'owner/repository'")
        return 0

    try:
        pr_number = int(os.environ["PULL_REQUEST_NUMBER"])
    except ValueError as e:
        print(f"Error parsing pull request number: {e}", file=sys.stderr)
        return 1

    try:
        github_client = _create_client(os.environ.get("GITHUB_ENTERPRISE_URL"))
    except Exception as e:
        print(f"Error authenticating with GitHub: {e}", file=sys.stderr)
        return 1

    if github_client is None:
        print(
            "Error: Either GITHUB_TOKEN or GitHub App credentials "
            "(GITHUB_APP_ID, GITHUB_APP_INSTALLATION_ID, GITHUB_APP_PRIVATE_KEY_BASE64) required",
            file=sys.stderr,
        )
        return 1

    try:
        run_labeler(
            repo=repo,
            pr_number=pr_number,
            github_client=github_client,
            config_path=Path(args.config),
            dry_run=args.dry_run,
        )
        return 0
    except LabelerError as e:
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
