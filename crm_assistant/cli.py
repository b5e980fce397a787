#!/usr/bin/env python3
"""
CRM Assistant CLI - Main entry point.

Usage:
    crm-assistant                          # Interactive menu (default)
    crm-assistant --mode research          # Web research with browser tools
    crm-assistant --mode analyze           # Analyze sample CRM data
    crm-assistant --mode automate          # Generate campaign/report content
    crm-assistant --provider openai --model gpt-4o-mini
    crm-assistant --save --debug
"""

import argparse
import json
import sys
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from dotenv import load_dotenv

from crm_assistant import __version__
from crm_assistant.agent import AgentRequestBuilder
from crm_assistant.config import get_system_prompt, settings
from crm_assistant.config import prompts
from crm_assistant.exceptions import (
    StorageError,
    ToolServerError,
    UpstreamRequestFailure,
    get_user_message,
)
from crm_assistant.logging import configure_logging, get_logger
from crm_assistant.model import CompletionClient, ModelResponse
from crm_assistant.sample_data import DATA_SOURCES, get_sample_data
from crm_assistant.storage import ResponseStore, timestamped_filename
from crm_assistant.terminal import (
    Colors,
    print_box,
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
    prompt,
    prompt_choice,
    prompt_multi_choice,
    prompt_multiline,
    prompt_yes_no,
)
from crm_assistant.tools import ToolRegistry

logger = get_logger("cli")

MODES = ("interactive", "research", "analyze", "automate")

MENU = {
    "research": "Web Research (browse websites, take screenshots)",
    "analyze": "CRM Data Analysis (analyze customer data)",
    "automate": "Workflow Automation (generate content, emails)",
    "chat": "Chat with AI (no tools, just conversation)",
    "exit": "Exit",
}

AUTOMATION_TASKS = {
    "email": "Email Campaign Generation",
    "social": "Social Media Content",
    "followup": "Follow-up Sequences",
    "report": "Report Generation",
    "custom": "Custom Automation",
}


def _options(*values: str) -> dict[str, str]:
    return {value: value for value in values}


@dataclass
class Task:
    """A prompt ready to be sent, plus how to name it when saved."""

    prompt: str
    system_prompt: str
    tool_server_ids: tuple[str, ...] = ()
    save_as: Optional[tuple[str, ...]] = None


@dataclass
class Mode:
    """Texts and prompt composer of one assistant mode."""

    title: str
    description: str
    status: str
    again_question: str
    compose: Callable[[], Optional[Task]]
    save_question: str = ""
    saved_label: str = ""


class AssistantApp:
    """
    Menu-driven terminal assistant.

    Args:
        provider: Requested provider name, validated per request.
        model: Requested model id, validated per request.
        builder: Builds requests (tool servers resolved through its registry).
        client: Sends requests.
        store: Saves responses.
        save: Save every response without asking.
        debug: Print tracebacks of upstream failures.
    """

    def __init__(
        self,
        provider: str,
        model: str,
        builder: AgentRequestBuilder,
        client: CompletionClient,
        store: ResponseStore,
        save: bool = False,
        debug: bool = False,
    ):
        self.provider = provider
        self.model = model
        self.builder = builder
        self.client = client
        self.store = store
        self.save = save
        self.debug = debug

        self.modes = {
            "research": Mode(
                title="Web Research Mode",
                description="Using Puppeteer to browse the web and gather information.",
                status="Researching...",
                again_question="Would you like to do another research?",
                save_question="Would you like to save this research?",
                saved_label="Research",
                compose=self.compose_research,
            ),
            "analyze": Mode(
                title="CRM Data Analysis Mode",
                description="Analyze customer data and generate insights.",
                status="Analyzing data...",
                again_question="Would you like to perform another analysis?",
                save_question="Would you like to save this analysis?",
                saved_label="Analysis",
                compose=self.compose_analysis,
            ),
            "automate": Mode(
                title="Workflow Automation Mode",
                description="Generate content and automate CRM workflows.",
                status="Generating automation...",
                again_question="Would you like to create another automation?",
                save_question="Would you like to save this content?",
                saved_label="Content",
                compose=self.compose_automation,
            ),
            "chat": Mode(
                title="Chat Mode",
                description="Have a conversation with the AI assistant without using tools.",
                status="Thinking...",
                again_question="Would you like to continue the conversation?",
                compose=self.compose_chat,
            ),
        }

    # ========== Navigation ==========

    def run(self, mode: str = "interactive") -> None:
        """Show the banner, run the requested mode, then the menu."""
        print_box("Wave CRM AI Assistant", Colors.BLUE, Colors.BOLD,
                  subtitle="Powered by Anthropic + OpenAI tool servers")
        if mode in self.modes:
            self.run_mode(mode)
        self.interactive()

    def interactive(self) -> None:
        """Main menu loop."""
        while True:
            action = prompt_choice("What would you like to do?", MENU)
            if action == "exit":
                return
            self.run_mode(action)

    def run_mode(self, name: str) -> None:
        """Run a mode until the user declines to repeat it."""
        mode = self.modes[name]
        while True:
            print_header(mode.title)
            print_info(mode.description)

            task = mode.compose()
            if task is None or not task.prompt:
                print_warning("No prompt provided. Returning to main menu.")
                return

            response = self.execute(task, mode.status)
            while response is None:
                if not prompt_yes_no("Would you like to try again?", default=False):
                    return
                response = self.execute(task, mode.status)

            self.display_response(response.text)

            if task.save_as is not None:
                if self.save or prompt_yes_no(mode.save_question, default=False):
                    self.save_response(task, response.text, mode.saved_label)

            if not prompt_yes_no(mode.again_question, default=False):
                return

    # ========== Request handling ==========

    def execute(self, task: Task, status: str) -> Optional[ModelResponse]:
        """Build and send a task; report failures and return None."""
        print_info(status)
        try:
            request = self.builder.build(
                self.provider,
                self.model,
                task.prompt,
                task.system_prompt,
                task.tool_server_ids,
            )
            return self.client.complete(request)
        except (UpstreamRequestFailure, ToolServerError) as e:
            logger.error("Request failed", error=str(e), kind=e.__class__.__name__)
            print_error(f"Error: {e}")
            print_info(get_user_message(e))
            if self.debug:
                print(traceback.format_exc(), file=sys.stderr)
            return None

    def save_response(self, task: Task, text: str, label: str) -> Optional[Path]:
        filename = timestamped_filename(*task.save_as)
        try:
            path = self.store.save(filename, text)
        except StorageError as e:
            print_error(f"Error: {e}")
            return None
        print_success(f"{label} saved to {path}")
        return path

    def display_response(self, text: str) -> None:
        print_box("AI Response", Colors.GREEN, Colors.BOLD)
        for line in text.split("\n"):
            print(line)
        print()
        print()

    # ========== Prompt composers ==========

    def compose_research(self) -> Optional[Task]:
        question = prompt_multiline(
            "What would you like to research? (Be specific about websites, screenshots, etc.)"
        )
        if not question:
            return None
        return Task(
            prompt=question,
            system_prompt=get_system_prompt("research"),
            tool_server_ids=("puppeteer",),
            save_as=("research",),
        )

    def compose_analysis(self) -> Optional[Task]:
        data_source = prompt_choice("Which data would you like to analyze?", DATA_SOURCES)
        data = get_sample_data(data_source)
        question = prompt_multiline("What analysis would you like to perform on this data?")
        if not question:
            return None
        return Task(
            prompt=prompts.analysis_prompt(data_source, json.dumps(data, indent=4), question),
            system_prompt=get_system_prompt("analyze", data_source=data_source),
            save_as=("analysis", data_source),
        )

    def compose_automation(self) -> Optional[Task]:
        task = prompt_choice("What would you like to automate?", AUTOMATION_TASKS)

        if task == "email":
            audience = prompt_choice("Target audience?", _options(
                "prospects", "customers", "churned", "enterprise", "custom"))
            industry = prompt("Industry focus (optional)")
            goal = prompt_choice("Campaign goal?", _options(
                "awareness", "conversion", "retention", "upsell", "other"))
            text = prompts.email_campaign_prompt(audience, industry, goal)
        elif task == "social":
            platforms = prompt_multi_choice(
                "Which platforms?", ["LinkedIn", "Twitter", "Facebook", "Instagram"], ["LinkedIn"])
            content_type = prompt_choice("Content type?", _options(
                "thought leadership", "product updates", "customer stories", "tips & tricks", "mixed"))
            count = prompt("How many posts?", "5")
            text = prompts.social_posts_prompt(count, platforms, content_type)
        elif task == "followup":
            scenario = prompt_choice("Follow-up scenario?", _options(
                "post-demo", "quote sent", "meeting no-show", "onboarding check-in", "renewal"))
            tone = prompt_choice("Communication tone?", _options(
                "professional", "friendly", "direct", "consultative"))
            text = prompts.followup_sequence_prompt(scenario, tone)
        elif task == "report":
            report_type = prompt_choice("Report type?", _options(
                "executive summary", "sales performance", "customer health", "marketing ROI", "custom"))
            timeframe = prompt_choice("Time period?", _options(
                "weekly", "monthly", "quarterly", "annual", "custom"))
            text = prompts.report_template_prompt(report_type, timeframe)
        else:
            text = prompt_multiline("Describe the automation task in detail:")

        if not text:
            return None
        return Task(
            prompt=text,
            system_prompt=get_system_prompt("automate", task=task),
            save_as=("automation", task),
        )

    def compose_chat(self) -> Optional[Task]:
        question = prompt_multiline("What would you like to talk about?")
        if not question:
            return None
        return Task(prompt=question, system_prompt=get_system_prompt("chat"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crm-assistant",
        description="AI assistant for Wave CRM",
    )
    parser.add_argument(
        "--mode",
        default="interactive",
        help="Mode to run (interactive, research, analyze, automate)",
    )
    parser.add_argument("--model", help="AI model to use")
    parser.add_argument("--provider", help="Provider to use (anthropic, openai)")
    parser.add_argument("--save", action="store_true", help="Save every response to a file")
    parser.add_argument("--debug", action="store_true", help="Show debug information")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv()
    if args.config:
        settings.config_file = Path(args.config)
    settings.reload()

    configure_logging(
        "DEBUG" if args.debug else settings.log.level,
        settings.log.file_path,
        settings.log.json_format,
    )
    logger.debug("Settings loaded", config_file=str(settings.config_file), **settings.to_dict())

    mode = args.mode if args.mode in MODES else "interactive"
    if mode != args.mode:
        logger.warn("Unknown mode, using interactive", requested=args.mode)

    try:
        with ToolRegistry(settings.tools.servers) as registry:
            app = AssistantApp(
                provider=args.provider or settings.model.provider,
                model=args.model or settings.model.model,
                builder=AgentRequestBuilder(registry),
                client=CompletionClient(settings.model, tool_registry=registry),
                store=ResponseStore(settings.storage.directory),
                save=args.save,
                debug=args.debug,
            )
            app.run(mode)
    except (KeyboardInterrupt, EOFError):
        print()
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
