"""
Transaction transformer: ledger record to ExplanationResult.

Pipeline for one record:
  1. Fee in SOL and USD (one reference-price lookup).
  2. Token balance deltas, priced from one bulk price query, resolved to
     transfers through the metadata cache.
  3. Account changes: mandatory fee debit first, then token changes grouped
     by owner.
  4. Classification from invoked programs.
  5-7. Step descriptions, program descriptions and the two audience
     explanations, all generated concurrently; each falls back to canned text.
  8. Fee comparison against a fixed Ethereum reference.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from decimal import Decimal

from backend_txlens.core.exceptions import GenerationError
from backend_txlens.core.request_context import unix_to_iso, utc_now_iso
from backend_txlens.explainer import prompts
from backend_txlens.explainer.deltas import BalanceDelta, distinct_mints, extract_balance_deltas
from backend_txlens.explainer.fallbacks import (
    fallback_explanation,
    fallback_program_description,
    fallback_step_description,
)
from backend_txlens.explainer.formatting import fixed, lamports_to_sol, signed, usd
from backend_txlens.explainer.models import (
    CREDIT,
    DEBIT,
    POOL_ACCOUNT,
    AccountChange,
    ExplanationResult,
    FeeComparison,
    ProgramSummary,
    Step,
    TokenTransfer,
)
from backend_txlens.explainer.programs import classify, program_name, step_titles
from backend_txlens.ledger.models import TransactionRecord
from backend_txlens.llm.client import TextGenerationClient
from backend_txlens.market.client import MarketDataClient
from backend_txlens.market.models import PriceEntry
from backend_txlens.txlens_logging import get_logger

logger = get_logger(__name__)

# Display constants for the fee comparison; not fetched.
ETHEREUM_AVG_FEE_USD = Decimal("7.5")
ETHEREUM_FEE_RANGE = "$5–10"

STATUS_CONFIRMED = "Confirmed"
STATUS_FAILED = "Failed"


def fee_savings_percent(usd_fee: str) -> str:
    """(1 - usd_fee / ETHEREUM_AVG_FEE_USD) * 100, 2 decimals."""
    return fixed((1 - Decimal(usd_fee) / ETHEREUM_AVG_FEE_USD) * 100, 2)


class TransactionTransformer:
    """Stateless per call; holds only the shared market and text-generation clients."""

    def __init__(self, market: MarketDataClient, generator: TextGenerationClient) -> None:
        self._market = market
        self._generator = generator

    async def _generate_or(self, prompt: str, fallback: str, kind: str) -> str:
        """Generated text, or `fallback` when generation fails or returns blank."""
        try:
            text = (await self._generator.generate(prompt)).strip()
        except GenerationError as e:
            logger.warning("explainer_generation_fallback", kind=kind, error=str(e))
            return fallback
        except Exception as e:
            logger.exception("explainer_generation_unexpected_error", kind=kind, error=str(e))
            return fallback
        return text or fallback

    async def _build_transfers(
        self,
        deltas: list[BalanceDelta],
        prices: dict[str, PriceEntry],
    ) -> tuple[list[TokenTransfer], list[AccountChange]]:
        transfers: list[TokenTransfer] = []
        changes_by_owner: dict[str, list[AccountChange]] = {}
        for delta in deltas:
            info = await self._market.get_asset_info(delta.mint, prices.get(delta.mint))
            amount = delta.amount
            credit = delta.is_credit
            value = abs(amount) * info.price if info.price > 0 else Decimal(0)
            transfers.append(
                TokenTransfer(
                    token=info.symbol,
                    amount=signed(amount, 6, negative=not credit),
                    usd_value=usd(value),
                    from_=POOL_ACCOUNT if credit else delta.owner,
                    to=delta.owner if credit else POOL_ACCOUNT,
                    direction=CREDIT if credit else DEBIT,
                )
            )
            changes_by_owner.setdefault(delta.owner, []).append(
                AccountChange(
                    wallet=delta.owner,
                    change=f"{signed(amount, 6, negative=not credit)} {info.symbol}",
                    reason="Swap In" if credit else "Swap Out",
                    direction=CREDIT if credit else DEBIT,
                    type="swap_in" if credit else "swap_out",
                )
            )
        token_changes = [c for group in changes_by_owner.values() for c in group]
        return transfers, token_changes

    async def transform(self, record: TransactionRecord) -> ExplanationResult:
        sol_price = await self._market.get_reference_price()
        sol_fee = lamports_to_sol(record.fee)
        sol_fee_str = fixed(sol_fee, 9)
        usd_fee = fixed(sol_fee * sol_price, 4)

        prices = await self._market.get_prices(distinct_mints(record))
        deltas = extract_balance_deltas(record)
        transfers, token_changes = await self._build_transfers(deltas, prices)

        account_changes = [
            AccountChange(
                wallet=record.fee_payer,
                change=f"-{sol_fee_str} SOL",
                reason="Transaction Fee",
                direction=DEBIT,
                type="fee",
            ),
            *token_changes,
        ]

        program_ids = record.program_ids()
        tx_type = classify(program_ids)
        names = [program_name(pid) for pid in program_ids]
        titles = step_titles(tx_type)

        explanation_calls: list[Awaitable[str]] = [
            self._generate_or(
                prompts.beginner_prompt(tx_type, transfers, names, usd_fee),
                fallback_explanation(tx_type, "beginner"),
                "beginner",
            ),
            self._generate_or(
                prompts.developer_prompt(tx_type, transfers, list(zip(names, program_ids)), usd_fee),
                fallback_explanation(tx_type, "developer"),
                "developer",
            ),
        ]
        step_calls = [
            self._generate_or(
                prompts.step_prompt(title, tx_type, n, len(titles)),
                fallback_step_description(title, n),
                "step",
            )
            for n, title in enumerate(titles, start=1)
        ]
        program_calls = [
            self._generate_or(
                prompts.program_prompt(name, pid),
                fallback_program_description(name),
                "program",
            )
            for name, pid in zip(names, program_ids)
        ]
        generated = await asyncio.gather(*explanation_calls, *step_calls, *program_calls)
        beginner, developer = generated[0], generated[1]
        step_texts = generated[2 : 2 + len(step_calls)]
        program_texts = generated[2 + len(step_calls) :]

        logger.info(
            "explainer_transaction_transformed",
            signature=record.signature[:16] + "...",
            tx_type=tx_type,
            transfer_count=len(transfers),
            program_count=len(program_ids),
        )

        return ExplanationResult(
            signature=record.signature,
            status=STATUS_CONFIRMED if record.succeeded else STATUS_FAILED,
            timestamp=unix_to_iso(record.block_time) if record.block_time else utc_now_iso(),
            fee_sol=sol_fee_str,
            fee_usd=usd_fee,
            type=tx_type,
            beginner_explanation=beginner,
            developer_explanation=developer,
            steps=[
                Step(title=title, description=text, time=f"Step {n}")
                for n, (title, text) in enumerate(zip(titles, step_texts), start=1)
            ],
            programs=[
                ProgramSummary(name=name, description=text, program_id=pid)
                for name, pid, text in zip(names, program_ids, program_texts)
            ],
            token_transfers=transfers,
            account_changes=account_changes,
            fee_comparison=FeeComparison(
                solana_fee=f"${usd_fee}",
                ethereum_fee=ETHEREUM_FEE_RANGE,
                savings=f"{fee_savings_percent(usd_fee)}%",
            ),
        )
