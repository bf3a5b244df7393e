"""
Exception types for curriculex.

Content-integrity errors are fatal: they stop lexicon construction and must
reach whatever process loads the curriculum. They do not subclass ValueError
so that pydantic validators let them through unchanged instead of folding
them into a ValidationError.
"""


class CurriculumIntegrityError(Exception):
    """Base class for build-time content-integrity violations."""


class OrdinalFormatError(CurriculumIntegrityError):
    """A module or lesson identifier does not encode a trailing ordinal."""

    def __init__(self, identifier: str, prefix: str):
        self.identifier = identifier
        self.prefix = prefix
        super().__init__(
            f"Identifier {identifier!r} does not match the '{prefix}<number>' convention"
        )


class DuplicateOrdinalError(CurriculumIntegrityError):
    """Two siblings (modules, or lessons within a module) share an ordinal."""


class DuplicateVocabularyError(CurriculumIntegrityError):
    """A vocabulary id is declared by more than one lesson."""

    def __init__(self, vocab_id: str, first_owner: str, second_owner: str):
        self.vocab_id = vocab_id
        self.first_owner = first_owner
        self.second_owner = second_owner
        super().__init__(
            f"Duplicate vocabulary id {vocab_id!r} (in {first_owner} and {second_owner})"
        )


class IndexNotInitializedError(RuntimeError):
    """The index was queried before a curriculum was installed."""
