"""
Stream pipeline of external commands.

Equivalent to `stage1 | stage2 | ... > output_path`, except that every
stage's exit status is collected instead of only the last one.
"""

import subprocess
from typing import List


class PipelineError(Exception):
    """Raised when a pipeline stage cannot be started."""
    pass


class Stage:
    """A named external command in the pipeline."""

    def __init__(self, name: str, argv: List[str]):
        self.name = name
        self.argv = list(argv)

    def __repr__(self):
        return f"<Stage {self.name}: {' '.join(self.argv)}>"


class StageResult:
    """Exit status of one stage."""

    def __init__(self, name: str, returncode: int):
        self.name = name
        self.returncode = returncode

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    def __repr__(self):
        return f"<StageResult {self.name}={self.returncode}>"


class PipelineResult:
    """Combined outcome: failed if any stage failed."""

    def __init__(self, stages: List[StageResult]):
        self.stages = stages

    @property
    def failed_stages(self) -> List[StageResult]:
        return [stage for stage in self.stages if not stage.succeeded]

    @property
    def succeeded(self) -> bool:
        return not self.failed_stages


class StreamPipeline:
    """
    Runs stages back to back, the last one writing to output_path.

    stderr of every stage is inherited, so progress meters draw straight
    onto the terminal.
    """

    def __init__(self, stages: List[Stage], output_path: str):
        if not stages:
            raise ValueError("Pipeline needs at least one stage")
        self.stages = stages
        self.output_path = output_path
        self.processes = []

    def run(self) -> PipelineResult:
        """
        Execute the pipeline and wait for every stage.

        Returns:
            PipelineResult with one StageResult per stage, in order

        Raises:
            PipelineError: If the output cannot be opened or a stage cannot be started
        """
        self.processes = []

        try:
            output = open(self.output_path, 'wb')
        except OSError as e:
            raise PipelineError(f"Failed to open output '{self.output_path}': {e}")

        with output:
            try:
                self._start(output)
                returncodes = [process.wait() for process in self.processes]
            except BaseException:
                # Interrupts included: never leave stages running behind us
                self._terminate()
                raise

        return PipelineResult([
            StageResult(stage.name, returncode)
            for stage, returncode in zip(self.stages, returncodes)
        ])

    def _start(self, output):
        upstream = None
        last_index = len(self.stages) - 1

        for index, stage in enumerate(self.stages):
            stdout = output if index == last_index else subprocess.PIPE
            try:
                process = subprocess.Popen(stage.argv, stdin=upstream, stdout=stdout)
            except OSError as e:
                raise PipelineError(f"Failed to start stage '{stage.name}': {e}")
            finally:
                # The child holds its own copy; closing ours lets the
                # producer see SIGPIPE if this consumer exits early
                if upstream is not None:
                    upstream.close()

            self.processes.append(process)
            upstream = process.stdout

    def _terminate(self):
        for process in self.processes:
            if process.poll() is None:
                process.terminate()

        for process in self.processes:
            if process.stdout is not None:
                process.stdout.close()
            try:
                process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()
