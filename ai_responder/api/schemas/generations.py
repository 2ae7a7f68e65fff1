from pydantic import BaseModel, Field


class StartGenerationRequest(BaseModel):
    channel_id: str = Field(..., min_length=1, description="Chat channel that receives generation indicator events")
    message_id: str = Field(..., min_length=1, description="Placeholder message whose text is replaced as the reply streams")
    message: str = Field(..., min_length=1, description="User message the assistant replies to")


class StartGenerationResponse(BaseModel):
    message_id: str = Field(..., description="Message id the reply is streamed into")
    status: str = Field(default="accepted", description="Generation is scheduled; progress is reported through channel events")


class StopGenerationResponse(BaseModel):
    message_id: str = Field(..., description="Message id the stop request was addressed to")
    stopped: bool = Field(..., description="True when a stop signal was delivered to an active reply")


class ActiveGenerationsResponse(BaseModel):
    message_ids: list[str] = Field(default_factory=list, description="Message ids with a reply still in flight")


class ChatWebhookEvent(BaseModel):
    type: str = Field(..., min_length=1, description="Chat event name, for example generation.stop")
    message_id: str = Field(..., min_length=1, description="Message the event refers to")


class ChatWebhookResponse(BaseModel):
    accepted: bool = Field(..., description="False when the event type is not handled by this service")
