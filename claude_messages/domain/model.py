"""
Model Identifier Domain Model

Enumerates the supported Claude models and their output token limits.
See https://docs.anthropic.com/claude/docs/models-overview
"""

from enum import Enum


class ClaudeModel(str, Enum):
    """The model that will complete the prompt."""

    # Claude 3
    CLAUDE_3_OPUS_20240229 = "claude-3-opus-20240229"
    CLAUDE_3_SONNET_20240229 = "claude-3-sonnet-20240229"
    CLAUDE_3_HAIKU_20240307 = "claude-3-haiku-20240307"
    # Claude 3.5
    CLAUDE_35_SONNET_20240620 = "claude-3-5-sonnet-20240620"
    CLAUDE_35_HAIKU_20241022 = "claude-3-5-haiku-20241022"
    # Claude 3.7
    CLAUDE_37_SONNET_20250219 = "claude-3-7-sonnet-20250219"
    # Claude 4
    CLAUDE_4_OPUS_20250514 = "claude-opus-4-20250514"
    CLAUDE_4_SONNET_20250514 = "claude-sonnet-4-20250514"
    # Claude 4.1
    CLAUDE_41_OPUS_20250805 = "claude-opus-4-1-20250805"
    CLAUDE_41_SONNET_20250805 = "claude-sonnet-4-1-20250805"
    # Claude 4.5
    CLAUDE_45_SONNET_20250929 = "claude-sonnet-4-5-20250929"

    @classmethod
    def default(cls) -> "ClaudeModel":
        return cls.CLAUDE_3_SONNET_20240229

    @property
    def max_tokens(self) -> int:
        """Maximum number of output tokens the model accepts for max_tokens."""
        return _MAX_OUTPUT_TOKENS[self]

    def __str__(self) -> str:
        return self.value


_MAX_OUTPUT_TOKENS: dict[ClaudeModel, int] = {
    ClaudeModel.CLAUDE_3_OPUS_20240229: 4096,
    ClaudeModel.CLAUDE_3_SONNET_20240229: 4096,
    ClaudeModel.CLAUDE_3_HAIKU_20240307: 4096,
    ClaudeModel.CLAUDE_35_SONNET_20240620: 4096,
    ClaudeModel.CLAUDE_35_HAIKU_20241022: 8192,
    ClaudeModel.CLAUDE_37_SONNET_20250219: 64000,
    ClaudeModel.CLAUDE_4_OPUS_20250514: 32000,
    ClaudeModel.CLAUDE_4_SONNET_20250514: 64000,
    ClaudeModel.CLAUDE_41_OPUS_20250805: 32000,
    ClaudeModel.CLAUDE_41_SONNET_20250805: 64000,
    ClaudeModel.CLAUDE_45_SONNET_20250929: 64000,
}
