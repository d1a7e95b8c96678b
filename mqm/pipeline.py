#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Analysis Pipeline - one MQM analysis request end to end

    request ─► pairs (parse file | segment + align text)
            ─► word limit
            ─► cache lookup ──hit──► result
            ─► evaluate in batches ─► aggregate ─► cache store ─► result

Each batch of model calls runs concurrently and is awaited as a whole
before the next batch starts. The first failure cancels what is still in
flight and propagates unchanged: nothing is aggregated or cached for a
failed run. Cache lookup and store are not atomic, so two identical
concurrent requests may both reach the model.
"""

import asyncio
from typing import List, Optional, Sequence, Tuple

from tqdm import tqdm

from ai_providers import ClaudeProvider
from config.logging_config import get_logger
from config.settings import settings as default_settings

from .alignment import SegmentAligner
from .cache import AnalysisCache, AnalysisFingerprint
from .evaluator import MQMSegmentEvaluator, SegmentEvaluator
from .exceptions import EmptyInputError, WordLimitExceededError
from .file_parsers import decode_buffer, get_parser
from .language import LanguageDetector, normalize_language_code
from .models import AggregateResult, AnalysisMode, AnalysisRequest, SegmentEvaluation, SegmentPair
from .scoring import ScoreAggregator, pair_word_count
from .segmentation import Segmenter

logger = get_logger(__name__)

AUTO_LANGUAGE = "auto"


def resolve_language(code: Optional[str], text: str) -> str:
    """Normalized code; 'auto' (or nothing) is detected from the text"""
    if code and code.strip().lower() != AUTO_LANGUAGE:
        return normalize_language_code(code)
    if not text or not text.strip():
        return ""

    detected, confidence = LanguageDetector.detect(text)
    if detected == "unknown":
        logger.debug("Language detection found no known script")
        return ""
    logger.debug(f"Detected language '{detected}' (confidence {confidence:.2f})")
    return detected


class AnalysisPipeline:
    """
    Runs AnalysisRequests through segmentation, evaluation and scoring.

    Args:
        evaluator: Segment evaluator (model-backed in production)
        cache: Result cache; None disables caching
        segmenter: Sentence segmenter for free text
        aligner: Source/target aligner
        aggregator: Score aggregator
        batch_size: Model calls issued concurrently per batch
        request_timeout: Seconds allowed per model call (None or 0: no limit)
        max_words: Word limit of the assessed text (0: no limit)
        show_progress: Show a tqdm progress bar over segments
    """

    def __init__(
        self,
        evaluator: SegmentEvaluator,
        cache: Optional[AnalysisCache] = None,
        segmenter: Optional[Segmenter] = None,
        aligner: Optional[SegmentAligner] = None,
        aggregator: Optional[ScoreAggregator] = None,
        batch_size: Optional[int] = None,
        request_timeout: Optional[float] = None,
        max_words: Optional[int] = None,
        show_progress: Optional[bool] = None,
    ):
        self.evaluator = evaluator
        self.cache = cache
        self.segmenter = segmenter or Segmenter()
        self.aligner = aligner or SegmentAligner()
        self.aggregator = aggregator or ScoreAggregator()

        self.batch_size = max(1, batch_size if batch_size is not None else default_settings.batch_size)
        self.request_timeout = (
            request_timeout if request_timeout is not None else default_settings.request_timeout
        )
        self.max_words = max_words if max_words is not None else default_settings.max_words
        self.show_progress = (
            show_progress if show_progress is not None else default_settings.show_progress
        )

    @classmethod
    def from_settings(cls, settings=None, model: Optional[str] = None) -> 'AnalysisPipeline':
        """Claude-backed pipeline configured from Settings"""
        settings = settings or default_settings
        provider = ClaudeProvider.from_settings(settings, model=model)
        cache = AnalysisCache.from_settings(settings) if settings.cache_enabled else None

        logger.debug(f"Pipeline settings: {settings.summary()}")
        return cls(
            evaluator=MQMSegmentEvaluator(provider),
            cache=cache,
            batch_size=settings.batch_size,
            request_timeout=settings.request_timeout,
            max_words=settings.max_words,
            show_progress=settings.show_progress,
        )

    # ========== Public API ==========

    async def analyze(self, request: AnalysisRequest) -> AggregateResult:
        """
        Analyze one request.

        Raises:
            UnsupportedFormatError: File type is neither TMX nor XLIFF
            MalformedFileError: File can't be parsed
            EmptyInputError: Nothing to analyze
            WordLimitExceededError: Assessed text over max_words
            EvaluationError: A model reply could not be understood
        """
        mode = AnalysisMode.parse(request.mode)
        evaluator = self.evaluator.with_model(request.model_id)
        model_id = evaluator.model_id

        if request.is_file:
            pairs, mode = self._pairs_from_file(request, mode)
            fingerprint = AnalysisFingerprint.from_pairs(pairs, mode, model_id)
        else:
            pairs, mode, fingerprint = self._pairs_from_text(request, mode, model_id)

        self._check_word_limit(pairs, mode)

        if self.cache is not None:
            cached = self.cache.lookup(fingerprint)
            if cached is not None:
                logger.info(f"Cache hit for {len(pairs)} segments ({fingerprint.key[:12]})")
                return cached
            logger.debug(f"Cache miss ({fingerprint.key[:12]})")

        logger.info(f"Analyzing {len(pairs)} segments ({mode.value}, model {model_id})")
        evaluations = await self._evaluate_all(evaluator, pairs, mode)

        result = self.aggregator.aggregate(evaluations, mode, model_id)

        if self.cache is not None:
            self.cache.store(fingerprint, result)

        logger.info(
            f"Analysis complete: score {result.overall_score:.2f}, "
            f"{result.word_count} words, {result.issue_count} issues"
        )
        return result

    async def close(self) -> None:
        """Close the evaluator's model client"""
        await self.evaluator.close()

    # ========== Request preparation ==========

    def _pairs_from_file(
        self, request: AnalysisRequest, mode: AnalysisMode
    ) -> Tuple[List[SegmentPair], AnalysisMode]:
        parser = get_parser(request.file_type)
        pairs = self.aligner.from_file(
            parser.parse(decode_buffer(request.file_buffer, parser.file_type))
        )

        if not pairs:
            raise EmptyInputError("File contains no segments to analyze")

        has_targets = any(pair.target.strip() for pair in pairs)
        if mode == AnalysisMode.MONOLINGUAL or not has_targets:
            if not has_targets and mode == AnalysisMode.BILINGUAL:
                logger.info("File has no target text, analyzing source text monolingually")
            pairs = [
                SegmentPair(
                    id=pair.id,
                    source="",
                    target=pair.assessed_text,
                    target_lang=pair.assessed_lang,
                )
                for pair in pairs
            ]
            mode = AnalysisMode.MONOLINGUAL

        return pairs, mode

    def _pairs_from_text(
        self, request: AnalysisRequest, mode: AnalysisMode, model_id: str
    ) -> Tuple[List[SegmentPair], AnalysisMode, AnalysisFingerprint]:
        source = request.source_text or ""
        target = request.target_text or ""

        if not source.strip() and not target.strip():
            raise EmptyInputError("No text to analyze")

        if mode == AnalysisMode.BILINGUAL and not (source.strip() and target.strip()):
            logger.info("Only one text given, switching to monolingual analysis")
            mode = AnalysisMode.MONOLINGUAL

        if mode == AnalysisMode.MONOLINGUAL:
            if target.strip():
                text, lang = target, resolve_language(request.target_lang, target)
            else:
                text, lang = source, resolve_language(request.source_lang, source)

            pairs = self.aligner.align(None, self.segmenter.segment(text, lang), None, lang)
            fingerprint = AnalysisFingerprint.create(
                target_text=text,
                source_text=None,
                target_lang=lang,
                mode=mode,
                model_id=model_id,
            )
            return pairs, mode, fingerprint

        source_lang = resolve_language(request.source_lang, source)
        target_lang = resolve_language(request.target_lang, target)

        pairs = self.aligner.align(
            self.segmenter.segment(source, source_lang),
            self.segmenter.segment(target, target_lang),
            source_lang,
            target_lang,
        )
        fingerprint = AnalysisFingerprint.create(
            target_text=target,
            source_text=source,
            source_lang=source_lang,
            target_lang=target_lang,
            mode=mode,
            model_id=model_id,
        )
        return pairs, mode, fingerprint

    def _check_word_limit(self, pairs: Sequence[SegmentPair], mode: AnalysisMode) -> None:
        if not self.max_words:
            return
        word_count = sum(pair_word_count(pair, mode) for pair in pairs)
        if word_count > self.max_words:
            raise WordLimitExceededError(word_count, self.max_words)

    # ========== Evaluation ==========

    async def _evaluate_all(
        self,
        evaluator: SegmentEvaluator,
        pairs: Sequence[SegmentPair],
        mode: AnalysisMode,
    ) -> List[SegmentEvaluation]:
        """Evaluate pairs batch by batch, preserving order"""
        results: List[SegmentEvaluation] = []
        progress_bar = (
            tqdm(total=len(pairs), desc="MQM evaluation", unit="seg")
            if self.show_progress else None
        )

        try:
            for start in range(0, len(pairs), self.batch_size):
                batch = pairs[start:start + self.batch_size]
                logger.debug(
                    f"Evaluating segments #{batch[0].id}-#{batch[-1].id} "
                    f"({start + len(batch)}/{len(pairs)})"
                )
                results.extend(await self._evaluate_batch(evaluator, batch, mode))

                if progress_bar:
                    progress_bar.update(len(batch))
        finally:
            if progress_bar:
                progress_bar.close()

        return results

    async def _evaluate_batch(
        self,
        evaluator: SegmentEvaluator,
        batch: Sequence[SegmentPair],
        mode: AnalysisMode,
    ) -> List[SegmentEvaluation]:
        """All calls of one batch concurrently; the first failure cancels the rest"""
        tasks = [
            asyncio.ensure_future(self._evaluate_one(evaluator, pair, mode))
            for pair in batch
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                if not task.done():
                    task.cancel()
            # Let cancelled calls unwind before the error leaves the batch
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _evaluate_one(
        self,
        evaluator: SegmentEvaluator,
        pair: SegmentPair,
        mode: AnalysisMode,
    ) -> SegmentEvaluation:
        try:
            return await asyncio.wait_for(
                evaluator.evaluate(pair, mode),
                timeout=self.request_timeout or None,
            )
        except asyncio.TimeoutError:
            logger.error(f"Segment #{pair.id}: evaluation timed out after {self.request_timeout}s")
            raise
