"""Abstract base class for commit sources."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class CommitSource(ABC):
    """
    Abstract interface for source-control hosts.
    
    Commit sources are read-only. Calls are made one at a time, in the
    order the collector issues them.
    """
    
    @abstractmethod
    def get_commit_files(self, ref: str) -> List[Dict[str, Any]]:
        """
        List the files changed by a commit.
        
        Args:
            ref: Commit SHA
            
        Returns:
            File descriptors with at least ``filename`` and ``status`` keys
        """
        pass
    
    @abstractmethod
    def list_pull_request_commits(self, commits_url: str) -> List[Dict[str, Any]]:
        """
        List every commit of a pull request.
        
        Args:
            commits_url: Commit listing URL from the pull request payload
            
        Returns:
            Commit descriptors with ``sha`` and ``parents`` keys
        """
        pass
