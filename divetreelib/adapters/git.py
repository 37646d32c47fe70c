"""Git adapter for divetreelib.

Reads trees and blobs of a git repository by running the git executable,
so no git bindings are required. A dive log is walked from the tree of a
local branch (or HEAD) without touching any working copy.
"""

import os
import subprocess
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ..core import EntryKind, TreeAdapter, TreeNode, join_path
from ..errors import BranchNotFoundError, ContentLoadError, RepositoryOpenError, TreePeelError


class GitTreeNode(TreeNode):
    """Node representing a tree or blob entry of a git tree."""

    def __init__(self, name: str, path: str, kind: EntryKind, sha: str, mode: str = "040000"):
        self.name = name
        self.path = path
        self.kind = kind
        self.sha = sha
        self.mode = mode

    def metadata(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'path': self.path,
            'type': self.kind.value,
            'sha': self.sha,
            'mode': self.mode,
        }


class GitRepository:
    """Handle on a git repository, driven through the git executable."""

    def __init__(self, path: Union[str, Path], git_executable: str = "git"):
        self.path = Path(path)
        self.git_executable = git_executable
        # Stop git from searching parent directories, so a subdirectory of
        # a work tree is not taken for the repository
        self._env = dict(os.environ,
                         GIT_CEILING_DIRECTORIES=str(self.path.resolve().parent))

    @classmethod
    def open(cls,
             location: Union[str, Path],
             branch: Optional[str] = None,
             git_executable: str = "git") -> "GitRepository":
        """Open the repository at location.

        Args:
            location: Path to the repository (work tree or bare)
            branch: Branch the caller is about to load, for the error message
            git_executable: Name or path of the git binary

        Raises:
            RepositoryOpenError: If location is not the top of a work tree
                or a bare repository
        """
        repo = cls(location, git_executable)
        try:
            repo._git("rev-parse", "--git-dir")
        except (subprocess.CalledProcessError, OSError):
            raise RepositoryOpenError(str(location), branch)
        return repo

    def _git(self, *args: str) -> bytes:
        result = subprocess.run(
            [self.git_executable, "-C", str(self.path), *args],
            capture_output=True,
            check=True,
            env=self._env,
        )
        return result.stdout

    def _rev_parse(self, revision: str) -> Optional[str]:
        try:
            out = self._git("rev-parse", "--verify", "--quiet", revision)
        except subprocess.CalledProcessError:
            return None
        return out.decode("ascii").strip() or None

    def resolve_branch(self, branch: Optional[str] = None) -> str:
        """Resolve a local branch and peel it to its root tree.

        Args:
            branch: Local branch name, None for HEAD

        Returns:
            Object id of the branch's root tree

        Raises:
            BranchNotFoundError: If the branch does not exist
            TreePeelError: If the branch does not point at a tree-ish
        """
        ref = f"refs/heads/{branch}" if branch else "HEAD"
        commit = self._rev_parse(ref)
        if commit is None:
            raise BranchNotFoundError(branch)
        tree = self._rev_parse(f"{commit}^{{tree}}")
        if tree is None:
            raise TreePeelError(branch)
        return tree

    def list_tree(self, tree_sha: str) -> List[Tuple[str, str, str, str]]:
        """List one tree level as (mode, type, sha, name) tuples, in git's order.

        Raises:
            ContentLoadError: If the tree cannot be read
        """
        try:
            out = self._git("ls-tree", "-z", tree_sha)
        except (subprocess.CalledProcessError, OSError) as e:
            raise ContentLoadError(f"Unable to read tree {tree_sha}: {e}")

        entries = []
        for record in out.split(b"\0"):
            if not record:
                continue
            # Parse: mode type sha\tname
            header, _, raw_name = record.partition(b"\t")
            parts = header.split()
            if len(parts) != 3:
                continue
            mode, obj_type, sha = (part.decode("ascii") for part in parts)
            name = raw_name.decode("utf-8", errors="surrogateescape")
            entries.append((mode, obj_type, sha, name))
        return entries

    def read_blob(self, sha: str) -> bytes:
        """Raises ContentLoadError if the blob cannot be read."""
        try:
            return self._git("cat-file", "blob", sha)
        except (subprocess.CalledProcessError, OSError) as e:
            raise ContentLoadError(f"Unable to read blob {sha}: {e}")


class GitTreeAdapter(TreeAdapter):
    """Adapter for walking one tree of a git repository."""

    def __init__(self, repository: GitRepository, tree_sha: str):
        """Initialize Git adapter.

        Args:
            repository: Opened repository
            tree_sha: Object id of the root tree to walk
        """
        self.repository = repository
        self.tree_sha = tree_sha

    @classmethod
    def from_location(cls,
                      location: Union[str, Path],
                      branch: Optional[str] = None,
                      git_executable: str = "git") -> "GitTreeAdapter":
        """Open a repository and resolve a branch to its root tree.

        Raises:
            RepositoryOpenError, BranchNotFoundError, TreePeelError
        """
        repository = GitRepository.open(location, branch, git_executable)
        return cls(repository, repository.resolve_branch(branch))

    def create_root_node(self) -> GitTreeNode:
        return GitTreeNode(name="", path="", kind=EntryKind.DIRECTORY, sha=self.tree_sha)

    def get_children(self, node: GitTreeNode) -> Iterator[GitTreeNode]:
        """Get children of a git tree node.

        Tree entries become directories; blobs and submodule links are files.
        """
        if not node.is_directory():
            return

        for mode, obj_type, sha, name in self.repository.list_tree(node.sha):
            kind = EntryKind.DIRECTORY if obj_type == "tree" else EntryKind.FILE
            yield GitTreeNode(name=name, path=join_path(node.path, name),
                              kind=kind, sha=sha, mode=mode)

    def read_content(self, node: GitTreeNode) -> bytes:
        if node.is_directory():
            raise ContentLoadError(f"{node.path} is a directory", path=node.path)
        try:
            return self.repository.read_blob(node.sha)
        except ContentLoadError as e:
            raise ContentLoadError(str(e), path=node.path)
