"""Commit Message Synthesizer - Diff text in, commit message out."""

from forjex import FALLBACK_MESSAGE
from forjex.commit.classifier import ChangeClassifier
from forjex.commit.description import DescriptionBuilder
from forjex.config import Config
from forjex.git.backend import GitBackend
from forjex.git.diff_parser import DiffParser
from forjex.output import NullReporter, Reporter


class CommitMessageSynthesizer:
    """Runs Parser -> Classifier -> Builder over the pending changes.

    generate() never raises and never returns an empty string.
    """

    def __init__(
        self,
        backend: GitBackend,
        reporter: Reporter | None = None,
        parser: DiffParser | None = None,
        classifier: ChangeClassifier | None = None,
        builder: DescriptionBuilder | None = None,
        fallback: str = FALLBACK_MESSAGE,
    ):
        self.backend = backend
        self.reporter = reporter or NullReporter()
        self.parser = parser or DiffParser()
        self.classifier = classifier or ChangeClassifier()
        self.builder = builder or DescriptionBuilder()
        self.fallback = fallback

    @classmethod
    def from_config(cls, backend: GitBackend, config: Config,
                    reporter: Reporter | None = None) -> 'CommitMessageSynthesizer':
        return cls(
            backend,
            reporter=reporter,
            parser=DiffParser(min_content_length=config.min_content_length),
            builder=DescriptionBuilder(max_names=config.max_names),
            fallback=config.fallback_message,
        )

    def generate(self) -> str:
        self.reporter.start("Analyzing code changes...")
        try:
            staged = True
            diff = self.backend.read_raw_diff(staged=True)
            if not diff.strip():
                staged = False
                diff = self.backend.read_raw_diff(staged=False)
                if not diff.strip():
                    self.reporter.stop()
                    return self.fallback

            self.reporter.update("Generating commit message...")
            name_status = self.backend.read_name_status(staged=staged)
            message = self.synthesize(diff, name_status)
        except Exception:
            self.reporter.fail("Could not analyze changes, using default message")
            return self.fallback

        self.reporter.succeed("Commit message generated")
        return message or self.fallback

    def synthesize(self, diff: str, name_status: str) -> str:
        """Pure part of the pipeline, usable without a repository."""
        entries, change_sets = self.parser.parse(diff, name_status)
        classification = self.classifier.classify(entries, change_sets)
        return str(self.builder.message(classification, entries, change_sets))
