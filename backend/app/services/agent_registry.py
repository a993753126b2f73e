import logging
from typing import Optional
from autogen_agentchat.agents import AssistantAgent
from autogen_ext.models.openai import AzureOpenAIChatCompletionClient
from agents import system_prompts
from shared.config import settings

logger = logging.getLogger(__name__)

async def _azure_client():
    return AzureOpenAIChatCompletionClient(
        azure_deployment=settings.az_deployment,
        model=settings.az_model,
        api_version=settings.az_api_version,
        azure_endpoint=settings.az_endpoint,
        api_key=settings.az_api_key,
    )

class AgentRegistry:
    """
    Owns the provider connection. AssistantAgent keeps its chat history between
    runs, so a fresh agent is built per request over the shared model client;
    concurrent requests never see each other's messages.
    """
    def __init__(self):
        self._initialized = False
        self._client: Optional[AzureOpenAIChatCompletionClient] = None

    async def init(self):
        if self._initialized: return
        self._client = await _azure_client()
        self._initialized = True
        logger.info(f"Provider client ready: deployment={settings.az_deployment} model={settings.az_model}")

    def _agent(self, name: str, system_message: str) -> AssistantAgent:
        if not self._initialized:
            raise RuntimeError("AgentRegistry.init() has not been awaited")
        return AssistantAgent(
            name=name,
            model_client=self._client,
            system_message=system_message,
            tools=[],
            reflect_on_tool_use=False,
            model_client_stream=False,
        )

    def summarizer(self) -> AssistantAgent:
        return self._agent("summarizer", system_prompts.SUMMARIZER_PROMPT)

    def translator(self) -> AssistantAgent:
        return self._agent("translator", system_prompts.TRANSLATOR_PROMPT)

    async def close(self):
        if not self._initialized: return
        await self._client.close()
        self._client = None
        self._initialized = False

agent_registry = AgentRegistry()
