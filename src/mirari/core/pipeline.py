"""
Build orchestration for mirari projects.

configure:  generate main.ml + main.obuild -> run device pre-build actions
            -> opam install (if packages) -> obuild configure
build:      obuild build -> link mir-<name> -> (Xen) mir-build image

Steps run one after another. The first failing step aborts the operation;
files already generated are left in place.
"""

import shlex
import shutil
from enum import Enum
from pathlib import Path
from typing import Optional

from mirari.core.project import Project
from mirari.core.runner import ProcessRunner, Runner
from mirari.core.toolchain import Toolchain
from mirari.errors import MirariError, StateError

# Written by obuild configure; its presence means configure has run
SETUP_MARKER = Path("dist") / "setup"

DIST_DIR = "dist"


class PipelineState(Enum):
    INIT = "init"
    GENERATED = "generated"
    CONFIGURED = "configured"
    BUILT = "built"
    PACKAGED = "packaged"
    FAILED = "failed"


class Pipeline:
    """Configure and build one project."""

    def __init__(
        self,
        project: Project,
        xen: bool = False,
        runner: Optional[Runner] = None,
        toolchain: Optional[Toolchain] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            project: Resolved project to configure and build.
            xen: Target the Xen platform (object output + image packaging).
            runner: Command runner; defaults to a ProcessRunner.
            toolchain: Tool names; defaults to Toolchain.from_env().
        """
        self.project = project
        self.xen = xen
        self.runner = runner if runner is not None else ProcessRunner()
        self.toolchain = toolchain if toolchain is not None else Toolchain.from_env()
        self.state = PipelineState.INIT
        self.failure: Optional[str] = None

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    @property
    def setup_marker(self) -> Path:
        return self.project.base_dir / SETUP_MARKER

    @property
    def build_dir(self) -> Path:
        return self.project.base_dir / DIST_DIR / "build" / self.project.name

    @property
    def executable(self) -> Path:
        return self.build_dir / self.project.name

    @property
    def exec_link(self) -> Path:
        return self.project.base_dir / f"mir-{self.project.name}"

    @property
    def native_object(self) -> Path:
        return self.build_dir / f"{self.project.name}.native.obj"

    @property
    def xen_image(self) -> Path:
        return self.build_dir / f"{self.project.name}.xen"

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def configure(self) -> PipelineState:
        """
        Generate sources and configure the build.

        Returns:
            PipelineState.CONFIGURED.

        Raises:
            MirariError: On the first failing step.
        """
        try:
            self.project.generate()
            self.state = PipelineState.GENERATED

            for device in self.project.devices:
                device.prepare(self.runner, self.toolchain)

            with self.runner.in_dir(self.project.base_dir):
                self._check_tools()
                self._install_packages()
                self.runner.run(
                    self._command(
                        self.toolchain.obuild, "configure", *self._configure_flags()
                    )
                )
        except MirariError as e:
            self._fail(e)
            raise

        self.state = PipelineState.CONFIGURED
        return self.state

    def build(self) -> PipelineState:
        """
        Build the configured project, packaging a Xen image if requested.

        Returns:
            PipelineState.BUILT, or PipelineState.PACKAGED after mir-build.

        Raises:
            StateError: If configure has not run.
            MirariError: On the first failing step.
        """
        try:
            if not self.setup_marker.exists():
                config_path = self.project.config.path
                raise StateError(
                    f"You should run 'mirari configure {config_path}' first."
                )

            with self.runner.in_dir(self.project.base_dir):
                remove_file(self.exec_link)
                self.runner.run(self._command(self.toolchain.obuild, "build"))
                self._link_executable()
                self.state = PipelineState.BUILT

                if self.xen and self.native_object.exists():
                    self.runner.require(self.toolchain.mir_build)
                    self.runner.run(
                        self._command(
                            self.toolchain.mir_build,
                            "-b",
                            "xen-native",
                            "-o",
                            str(self.xen_image.relative_to(self.project.base_dir)),
                            str(self.native_object.relative_to(self.project.base_dir)),
                        )
                    )
                    self.state = PipelineState.PACKAGED
        except MirariError as e:
            self._fail(e)
            raise

        return self.state

    def clean(self) -> list[Path]:
        """
        Remove generated files, the mir-<name> link and the dist/ directory.

        Returns:
            Paths that existed and were removed.
        """
        removed = []
        for path in self.project.generated_files() + [self.exec_link]:
            if path.exists() or path.is_symlink():
                remove_file(path)
                removed.append(path)

        dist = self.project.base_dir / DIST_DIR
        if dist.is_dir():
            try:
                shutil.rmtree(dist)
            except OSError as e:
                raise MirariError(f"Cannot remove {dist}: {e}") from e
            removed.append(dist)

        self.state = PipelineState.INIT
        return removed

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _check_tools(self) -> None:
        if self.project.descriptor.packages:
            self.runner.require(self.toolchain.opam)
        self.runner.require(self.toolchain.obuild)

    def _install_packages(self) -> None:
        packages = self.project.descriptor.packages
        if packages:
            self.runner.run(
                self._command(self.toolchain.opam, "install", "--yes", *packages)
            )

    def _link_executable(self) -> None:
        try:
            self.exec_link.symlink_to(self.executable)
        except OSError as e:
            raise MirariError(f"Cannot link {self.exec_link}: {e}") from e

    def _configure_flags(self) -> list[str]:
        return ["--executable-as-obj"] if self.xen else []

    @staticmethod
    def _command(tool: str, *args: str) -> str:
        return " ".join([tool] + [shlex.quote(arg) for arg in args])

    def _fail(self, error: MirariError) -> None:
        self.state = PipelineState.FAILED
        self.failure = str(error)


def remove_file(path: Path) -> None:
    """Delete a file or symlink; a missing path is not an error."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise MirariError(f"Cannot remove {path}: {e}") from e


def configure(
    config_file: Path | str,
    xen: bool = False,
    runner: Optional[Runner] = None,
    toolchain: Optional[Toolchain] = None,
) -> Pipeline:
    """Resolve ``config_file`` and run the configure phase."""
    pipeline = Pipeline(Project.from_file(config_file), xen, runner, toolchain)
    pipeline.configure()
    return pipeline


def build(
    config_file: Path | str,
    xen: bool = False,
    runner: Optional[Runner] = None,
    toolchain: Optional[Toolchain] = None,
) -> Pipeline:
    """Resolve ``config_file`` and run the build phase."""
    pipeline = Pipeline(Project.from_file(config_file), xen, runner, toolchain)
    pipeline.build()
    return pipeline


def clean(config_file: Path | str) -> list[Path]:
    """Remove everything configure and build produced for ``config_file``."""
    return Pipeline(Project.from_file(config_file)).clean()


def describe(config_file: Path | str) -> Project:
    """Resolve ``config_file`` without generating or running anything."""
    return Project.from_file(config_file)
