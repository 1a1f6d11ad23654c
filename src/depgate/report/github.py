"""GitHub PR comment formatting and posting."""

from typing import Optional
import requests
from ..contracts.run_result import RunResult
from ..policy.models import PolicyMode
from ..source.github import DEFAULT_API_URL
from ..utils.errors import DepGateError
from ..utils.logging import get_logger

logger = get_logger("report.github")

# Marker to identify depgate comments
COMMENT_MARKER = "<!-- depgate-report -->"


def format_github_comment(result: RunResult, mode: Optional[PolicyMode] = None) -> str:
    """
    Format RunResult as GitHub markdown comment.
    
    Args:
        result: RunResult from the gate
        mode: Policy mode shown in the header
        
    Returns:
        Formatted GitHub markdown comment string
    """
    status = "❌ Failed" if result.should_fail else ("⚠️ Violations" if result.has_violations else "✅ Passed")
    
    comment_parts = [
        COMMENT_MARKER,
        "",
        "## Dependency Policy Check",
        "",
        f"**Status:** {status}",
    ]
    if mode is not None:
        comment_parts.append(f"**Policy:** {PolicyMode(mode).value}")
    comment_parts.append(f"**Manifests Evaluated:** {len(result.evaluated_manifests)}")
    comment_parts.append("")
    
    if result.has_violations:
        comment_parts.append("### Violations")
        comment_parts.append("")
        for report in result.violations:
            comment_parts.append(f"**`{report.file_path}`**")
            comment_parts.append("")
            for package in report.packages:
                comment_parts.append(f"- `{package.name}` : `{package.version}`")
            comment_parts.append("")
    
    if result.parse_failures:
        comment_parts.append("### Unparseable Manifests")
        comment_parts.append("")
        for path in result.parse_failures:
            comment_parts.append(f"- `{path}`")
        comment_parts.append("")
    
    return "\n".join(comment_parts)


def post_pr_comment(
    repo: str,
    pr_number: int,
    comment: str,
    token: str,
    update: bool = False,
    api_url: str = DEFAULT_API_URL
) -> None:
    """
    Post comment to GitHub PR via REST API.
    
    Args:
        repo: Repository in format "owner/repo"
        pr_number: Pull request number
        comment: Comment body (markdown)
        token: GitHub token
        update: If True, update existing comment instead of creating new one
        api_url: REST API base URL
        
    Raises:
        DepGateError: If API call fails
    """
    if not repo or "/" not in repo:
        raise DepGateError(f"Invalid repository format: {repo}. Expected 'owner/repo'")
    
    owner, repo_name = repo.split("/", 1)
    base_url = api_url.rstrip("/")
    
    comments_url = f"{base_url}/repos/{owner}/{repo_name}/issues/{pr_number}/comments"
    
    headers = {
        "Authorization": f"token {token}",
        "Accept": "application/vnd.github.v3+json",
        "Content-Type": "application/json"
    }
    
    if update:
        try:
            response = requests.get(comments_url, headers=headers)
            response.raise_for_status()
            comments = response.json()
            
            existing_id = None
            for comment_obj in comments:
                if COMMENT_MARKER in comment_obj.get("body", ""):
                    existing_id = comment_obj["id"]
                    break
            
            if existing_id:
                update_url = f"{base_url}/repos/{owner}/{repo_name}/issues/comments/{existing_id}"
                update_response = requests.patch(
                    update_url,
                    headers=headers,
                    json={"body": comment}
                )
                update_response.raise_for_status()
                logger.info(f"Updated existing depgate comment on PR #{pr_number}")
                return
            
        except requests.exceptions.RequestException as e:
            logger.warning(f"Failed to check for existing comments: {e}")
            # Continue to create new comment
    
    try:
        response = requests.post(
            comments_url,
            headers=headers,
            json={"body": comment}
        )
        response.raise_for_status()
        logger.info(f"Posted depgate comment to PR #{pr_number}")
    
    except requests.exceptions.HTTPError as e:
        if e.response.status_code == 401:
            raise DepGateError("GitHub authentication failed. Check your github-token.")
        elif e.response.status_code == 404:
            raise DepGateError(f"Repository or PR not found: {repo}#{pr_number}")
        else:
            error_msg = e.response.text if hasattr(e.response, 'text') else str(e)
            raise DepGateError(f"GitHub API error: {error_msg}")
    
    except requests.exceptions.RequestException as e:
        raise DepGateError(f"Failed to post GitHub comment: {e}")
