"""LLM module."""

from .llm_provider import ILLMProvider, LLMProvider
from .summarizer import IAnswerSummarizer, LLMAnswerSummarizer

__all__ = ["ILLMProvider", "LLMProvider", "IAnswerSummarizer", "LLMAnswerSummarizer"]
