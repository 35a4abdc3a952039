from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any


class ChatMessage(BaseModel):
    role: str
    content: str = ""
    timestamp: Optional[str] = None


class ChatRequest(BaseModel):
    messages: List[ChatMessage]
    model: str = "neuralarch-assistant"
    max_tokens: int = 500
    temperature: float = 0.7


class EnhancedChatRequest(ChatRequest):
    model: str = "neuralarch-assistant-enhanced"
    max_tokens: int = 800
    context: Optional[Dict[str, Any]] = None


class ChatChoiceMessage(BaseModel):
    content: str
    insights: Optional[List[Dict[str, Any]]] = None


class ChatChoice(BaseModel):
    message: ChatChoiceMessage


class ChatCompletionOut(BaseModel):
    """One reply exposed under content, text and choices[0].message.content"""
    content: str
    text: str
    choices: List[ChatChoice]

    @classmethod
    def from_text(cls, reply: str) -> "ChatCompletionOut":
        return cls(
            content=reply,
            text=reply,
            choices=[ChatChoice(message=ChatChoiceMessage(content=reply))],
        )


class EnhancedChatOut(ChatCompletionOut):
    insights: List[Dict[str, Any]] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    visualizations: List[Dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_reply(cls, reply: Dict[str, Any]) -> "EnhancedChatOut":
        text = reply["text"]
        return cls(
            content=text,
            text=text,
            choices=[ChatChoice(message=ChatChoiceMessage(content=text, insights=reply["insights"]))],
            insights=reply["insights"],
            suggestions=reply["suggestions"],
            visualizations=reply["visualizations"],
        )
