from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import BinaryIO

from documind.ai.exceptions import ModelServiceError
from documind.ai.factory import ModelClientFactory
from documind.ai.messages import Role
from documind.analysis.analyzer import DocumentAnalyzer
from documind.analysis.comparer import DocumentComparer
from documind.analysis.models import AnalysisResult, SimilarityResult
from documind.chat.exceptions import ChatTurnError, EmptyMessageError
from documind.chat.models import ChatTurn
from documind.chat.session import ChatSession
from documind.chat.transcript import ChatTranscript
from documind.config.settings import Settings
from documind.encoding.encoder import DocumentEncoder
from documind.encoding.filters import is_accepted_mime_type
from documind.encoding.models import EncodedDocument
from documind.logging.logger import Log
from documind.workspace.exceptions import (
    DocumentTooLargeError,
    NoActiveDocumentError,
    UnsupportedDocumentError,
)
from documind.workspace.state import AnalysisStateMachine, AnalysisStatus

ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze document. Please ensure the file is valid and try again."
)
COMPARISON_FAILED_MESSAGE = "Failed to compare documents. Please try again."
CHAT_FAILED_MESSAGE = "Sorry, I encountered an error responding to that. Please try again."
CHAT_GREETING = "Hi! I've analyzed **{name}**. Ask me anything about it."

Source = str | Path | BinaryIO
ChatSessionFactory = Callable[[EncodedDocument], ChatSession]


class DocumentWorkspace:
    """Holds one document session: the file, its analysis and its chat.

    Pipeline: load -> analyze -> (chat | compare). Selecting another file or
    clearing the workspace discards the previous analysis and chat.
    """

    def __init__(
        self,
        *,
        encoder: DocumentEncoder,
        analyzer: DocumentAnalyzer,
        comparer: DocumentComparer,
        chat_factory: ChatSessionFactory,
        max_upload_bytes: int,
    ) -> None:
        self._encoder = encoder
        self._analyzer = analyzer
        self._comparer = comparer
        self._chat_factory = chat_factory
        self._max_upload_bytes = max_upload_bytes
        self._state = AnalysisStateMachine()
        self._document: EncodedDocument | None = None
        self._result: AnalysisResult | None = None
        self._error: str | None = None
        self._chat: ChatSession | None = None
        self._transcript: ChatTranscript | None = None
        self.last_comparison_error: str | None = None

    @property
    def status(self) -> AnalysisStatus:
        return self._state.status

    @property
    def document(self) -> EncodedDocument | None:
        return self._document

    @property
    def result(self) -> AnalysisResult | None:
        return self._result

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def chat(self) -> ChatSession | None:
        return self._chat

    @property
    def transcript(self) -> ChatTranscript | None:
        return self._transcript

    def load(
        self,
        source: Source,
        *,
        mime_type: str | None = None,
        name: str | None = None,
    ) -> EncodedDocument:
        """Encode a file after applying the accept filter and size limit.

        Raises:
            ReadError: if the file cannot be read.
            UnsupportedDocumentError: if it is not an image or a PDF.
            DocumentTooLargeError: if it exceeds the upload limit.
        """
        document = self._encoder.encode(source, mime_type=mime_type, name=name)
        if not is_accepted_mime_type(document.mime_type):
            raise UnsupportedDocumentError(
                f"{document.original_name}: unsupported type {document.mime_type}"
            )
        if document.size_bytes > self._max_upload_bytes:
            raise DocumentTooLargeError(
                f"{document.original_name}: {document.size_bytes} bytes exceeds "
                f"the {self._max_upload_bytes} byte limit"
            )
        return document

    async def analyze(
        self,
        source: Source,
        *,
        mime_type: str | None = None,
        name: str | None = None,
    ) -> AnalysisResult | None:
        """Select a new document and analyze it.

        Returns the result, or None when the model call failed; the failure
        is then reported through ``status`` and ``error``.
        """
        document = self.load(source, mime_type=mime_type, name=name)
        self._state.start()
        self._close_chat()
        self._document = document
        self._result = None
        self._error = None

        try:
            result = await self._analyzer.analyze(document)
        except ModelServiceError as exc:
            Log.error(f"Analysis failed for {document.original_name}: {exc}")
            self._error = ANALYSIS_FAILED_MESSAGE
            self._state.fail()
            return None
        except BaseException:
            # Cancelled (e.g. an outer timeout); leave the workspace retryable.
            Log.warning(f"Analysis interrupted for {document.original_name}")
            if self.status is AnalysisStatus.ANALYZING:
                self._error = ANALYSIS_FAILED_MESSAGE
                self._state.fail()
            raise

        self._result = result
        self._state.succeed()
        return result

    def open_chat(self) -> ChatTranscript:
        """Start a fresh chat about the analyzed document."""
        if self._document is None or self.status is not AnalysisStatus.COMPLETED:
            raise NoActiveDocumentError("Analyze a document before starting a chat")
        self._close_chat()
        self._chat = self._chat_factory(self._document)
        self._transcript = ChatTranscript()
        self._transcript.append(
            Role.ASSISTANT, CHAT_GREETING.format(name=self._document.original_name)
        )
        return self._transcript

    async def ask(self, text: str) -> ChatTurn:
        """Send a question and record both sides in the transcript.

        Both turns are recorded once the exchange settles, so the question
        is always followed by its own answer. A failed exchange is recorded
        as an inline assistant turn marked ``failed`` and returned instead
        of raising. Nothing is recorded when an exception propagates.

        Raises:
            EmptyMessageError: if ``text`` is blank.
            SessionStateError: if a previous question is still pending.
        """
        chat, transcript = self._chat, self._transcript
        if chat is None or transcript is None:
            raise NoActiveDocumentError("Open a chat before asking questions")
        if not text.strip():
            raise EmptyMessageError("Message must not be empty")

        try:
            reply = await chat.send(text)
        except ChatTurnError:
            transcript.append(Role.USER, text)
            return transcript.append(Role.ASSISTANT, CHAT_FAILED_MESSAGE, failed=True)
        transcript.append(Role.USER, text)
        return transcript.append(Role.ASSISTANT, reply)

    async def compare(self, source_a: Source, source_b: Source) -> SimilarityResult | None:
        """Compare two files independently of the current document session."""
        doc_a = self.load(source_a)
        doc_b = self.load(source_b)
        self.last_comparison_error = None
        try:
            return await self._comparer.compare(doc_a, doc_b)
        except ModelServiceError as exc:
            Log.error(f"Comparison failed: {exc}")
            self.last_comparison_error = COMPARISON_FAILED_MESSAGE
            return None

    def clear(self) -> None:
        self._close_chat()
        self._document = None
        self._result = None
        self._error = None
        self._state.reset()

    def _close_chat(self) -> None:
        if self._chat is not None:
            self._chat.close()
        self._chat = None
        self._transcript = None


def build_workspace(settings: Settings) -> DocumentWorkspace:
    """Build a DocumentWorkspace with all required collaborators."""
    client = ModelClientFactory.create(settings)
    model = ModelClientFactory.resolve_model_name(settings)
    return DocumentWorkspace(
        encoder=DocumentEncoder(),
        analyzer=DocumentAnalyzer(
            client=client, model=model, temperature=settings.analysis_temperature
        ),
        comparer=DocumentComparer(
            client=client, model=model, temperature=settings.similarity_temperature
        ),
        chat_factory=partial(
            ChatSession.create,
            client=client,
            model=model,
            temperature=settings.chat_temperature,
        ),
        max_upload_bytes=settings.max_upload_bytes,
    )
