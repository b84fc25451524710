"""
Account mutation orchestration: change local ID and clone account.

Both operations follow the same linear flow:

    resolve credential -> fetch player record -> fetch vehicles
    -> rewrite + sanitize + save player record (fatal on failure)
    -> rewrite + sanitize + save each vehicle (counted, never fatal)

Fatal steps raise AccountRelayError subclasses; the public entry points
turn them into a failed OperationResult. Nothing is rolled back: a failed
vehicle save leaves the already saved player record in place, and the
caller may simply repeat the operation since rewriting already rewritten
data changes nothing.
"""
from dataclasses import dataclass
from typing import Optional
import asyncio

from account_relay.auth.providers.base import Credential, IdentityProvider
from account_relay.config import settings
from account_relay.core.exceptions import (
    AccountRelayError,
    AuthError,
    FetchError,
    NoOpError,
    SaveError,
)
from account_relay.logger import logger, print_stack_trace
from account_relay.schemas.operations import (
    AccountCredentials,
    AccountSummary,
    OperationDetails,
    OperationResult,
    PlayerOverrides,
)
from account_relay.schemas.records import EXTRA_DATA_FIELD, PlayerRecord, VehicleRecord
from account_relay.services.game_backend import GameBackend
from account_relay.utils.identifiers import generate_identifier, rewrite_identifier, strip_color_codes
from account_relay.utils.sanitizer import sanitize

DEFAULT_PLAYER_NAME = "Player"


@dataclass
class VehicleTally:
    total: int = 0
    updated: int = 0
    failed: int = 0

    def describe(self) -> str:
        if not self.total:
            return "no cars to update"
        if self.failed:
            return f"{self.updated}/{self.total} cars updated, {self.failed} failed"
        return f"{self.updated}/{self.total} cars updated"


class AccountMutator:
    def __init__(
        self,
        identity: IdentityProvider,
        backend: GameBackend,
        batch_size: Optional[int] = None,
        save_delay: Optional[float] = None,
        preserve_extra_data: Optional[bool] = None,
    ):
        self.identity = identity
        self.backend = backend
        self.batch_size = max(1, batch_size or settings.VEHICLE_SAVE_BATCH_SIZE)
        self.save_delay = settings.VEHICLE_SAVE_DELAY if save_delay is None else save_delay
        self.preserve_extra_data = (
            settings.CLONE_PRESERVE_EXTRA_DATA if preserve_extra_data is None else preserve_extra_data
        )

    # ============================================================================
    # Shared steps
    # ============================================================================

    async def resolve_credential(self, credentials: AccountCredentials) -> Credential:
        """
        Return a working credential for the account.

        A supplied token is probed first; if the probe fails and email and
        password are present, a fresh login is performed instead.
        """
        if credentials.token:
            try:
                account = await self.identity.lookup_account(credentials.token)
                return Credential(
                    id_token=credentials.token,
                    refresh_token=None,
                    expires_in=None,
                    account_id=account.account_id,
                    email=account.email,
                )
            except AuthError as e:
                if not credentials.has_login:
                    raise
                logger.warning(f"Supplied credential failed probe, logging in instead: {e}")

        if not credentials.has_login:
            raise AuthError("No credential or login details supplied")

        return await self.identity.sign_in(credentials.email, credentials.password)

    async def _fetch_vehicles(self, id_token: str) -> list[dict]:
        try:
            return await self.backend.fetch_vehicle_list(id_token)
        except FetchError as e:
            logger.warning(f"Vehicle list unavailable, continuing without cars: {e}")
            return []

    async def _save_vehicle(self, id_token: str, vehicle: dict, old_id: str, old_id_clean: str, new_id: str) -> bool:
        rewritten = rewrite_identifier(vehicle, old_id, old_id_clean, new_id)
        record = VehicleRecord.from_payload(rewritten)
        if rewritten is vehicle:
            # Rewrite fell back to the original; CarID still names the old owner
            record.retarget(old_id, old_id_clean, new_id)

        try:
            await self.backend.save_vehicle(id_token, sanitize(record.to_payload()))
        except SaveError as e:
            logger.warning(f"Car {record.car_id} not saved: {e}")
            return False
        return True

    async def _save_vehicles(
        self, id_token: str, vehicles: list[dict], old_id: str, old_id_clean: str, new_id: str
    ) -> VehicleTally:
        """Save vehicles in small concurrent batches, pausing between batches."""
        tally = VehicleTally(total=len(vehicles))

        for start in range(0, len(vehicles), self.batch_size):
            if start and self.save_delay:
                await asyncio.sleep(self.save_delay)

            batch = vehicles[start:start + self.batch_size]
            results = await asyncio.gather(*(
                self._save_vehicle(id_token, vehicle, old_id, old_id_clean, new_id)
                for vehicle in batch
            ))
            saved = sum(1 for ok in results if ok)
            tally.updated += saved
            tally.failed += len(results) - saved

        return tally

    @staticmethod
    def _summary(credential: Credential, record: Optional[PlayerRecord], total_cars: int = 0) -> AccountSummary:
        summary = AccountSummary(
            accountId=credential.account_id or None,
            email=credential.email,
            totalCars=total_cars,
        )
        if record is not None:
            summary.localID = record.local_id or None
            summary.cleanId = strip_color_codes(record.local_id) or None
            summary.name = record.name
            summary.money = record.money
            summary.coin = record.coin
        return summary

    # ============================================================================
    # Change local ID
    # ============================================================================

    async def change_identifier(
        self,
        credentials: AccountCredentials,
        new_id: str,
        overrides: Optional[PlayerOverrides] = None,
    ) -> OperationResult:
        """Rewrite the account's local ID in the player record and every car."""
        try:
            return await self._change_identifier(credentials, (new_id or "").strip(), overrides)
        except AccountRelayError as e:
            print_stack_trace()
            logger.error(f"Change ID failed: {e}")
            return OperationResult.from_error(e)

    async def _change_identifier(
        self,
        credentials: AccountCredentials,
        new_id: str,
        overrides: Optional[PlayerOverrides],
    ) -> OperationResult:
        if not new_id:
            raise NoOpError("New ID must not be empty")

        credential = await self.resolve_credential(credentials)
        source = await self.backend.fetch_player_record(credential.id_token)

        old_id = PlayerRecord.from_payload(source).local_id
        if not old_id:
            raise FetchError("Player record has no local ID")
        old_id_clean = strip_color_codes(old_id)
        if new_id in (old_id, old_id_clean):
            raise NoOpError(f"New ID is the same as the current ID '{old_id_clean}'")

        vehicles = await self._fetch_vehicles(credential.id_token)
        logger.info(f"Changing local ID {old_id_clean} -> {new_id} ({len(vehicles)} cars)")

        record = PlayerRecord.from_payload(rewrite_identifier(source, old_id, old_id_clean, new_id))
        record.local_id = new_id
        if overrides:
            if overrides.name is not None:
                record.name = overrides.name
            if overrides.money is not None:
                record.money = overrides.money
            if overrides.coin is not None:
                record.coin = overrides.coin

        await self.backend.save_player_record(credential.id_token, sanitize(record.to_payload()))

        tally = await self._save_vehicles(credential.id_token, vehicles, old_id, old_id_clean, new_id)
        logger.info(f"Local ID changed to {new_id}: {tally.describe()}")

        return OperationResult(
            success=True,
            message=f"Local ID changed from {old_id_clean} to {new_id}; {tally.describe()}",
            details=OperationDetails(
                oldId=old_id,
                newId=new_id,
                carsUpdated=tally.updated,
                carsFailed=tally.failed,
                totalCars=tally.total,
            ),
        )

    # ============================================================================
    # Clone account
    # ============================================================================

    async def clone_account(
        self,
        source_credentials: AccountCredentials,
        target_email: str,
        target_password: str,
        new_id: Optional[str] = None,
    ) -> OperationResult:
        """Copy the source player record and cars into the target account."""
        try:
            return await self._clone_account(source_credentials, target_email, target_password, new_id)
        except AccountRelayError as e:
            print_stack_trace()
            logger.error(f"Clone failed: {e}")
            return OperationResult.from_error(e)

    async def _clone_account(
        self,
        source_credentials: AccountCredentials,
        target_email: str,
        target_password: str,
        new_id: Optional[str],
    ) -> OperationResult:
        source_credential = await self.resolve_credential(source_credentials)
        source = await self.backend.fetch_player_record(source_credential.id_token)
        vehicles = await self._fetch_vehicles(source_credential.id_token)

        target = await self.identity.sign_in(target_email, target_password)

        old_id = PlayerRecord.from_payload(source).local_id
        old_id_clean = strip_color_codes(old_id)
        dest_id = (new_id or "").strip() or generate_identifier()
        if not old_id:
            logger.warning("Source player record has no local ID, cars keep their IDs")
        logger.info(f"Cloning {old_id_clean or '<no id>'} -> {dest_id} into {target.account_id} ({len(vehicles)} cars)")

        record = PlayerRecord.from_payload(rewrite_identifier(source, old_id, old_id_clean, dest_id))
        record.local_id = dest_id
        if not record.name:
            record.name = DEFAULT_PLAYER_NAME
        if record.money is None:
            record.money = 0
        if record.coin is None:
            record.coin = 0
        if not self.preserve_extra_data:
            record.extra.pop(EXTRA_DATA_FIELD, None)

        await self.backend.save_player_record(target.id_token, sanitize(record.to_payload()))

        tally = await self._save_vehicles(target.id_token, vehicles, old_id, old_id_clean, dest_id)
        logger.info(f"Clone into {target.account_id} finished: {tally.describe()}")

        return OperationResult(
            success=True,
            message=f"Account cloned to {target.email or target_email} with ID {dest_id}; {tally.describe()}",
            details=OperationDetails(
                oldId=old_id or None,
                newId=dest_id,
                carsUpdated=tally.updated,
                carsFailed=tally.failed,
                totalCars=tally.total,
                targetEmail=target.email or target_email,
                targetAccountId=target.account_id or None,
            ),
        )

    # ============================================================================
    # Read-only
    # ============================================================================

    async def inspect_account(self, credentials: AccountCredentials) -> OperationResult:
        """Return the account's identity and player summary without writing."""
        try:
            credential = await self.resolve_credential(credentials)
            record = PlayerRecord.from_payload(await self.backend.fetch_player_record(credential.id_token))
            vehicles = await self._fetch_vehicles(credential.id_token)
        except AccountRelayError as e:
            logger.error(f"Inspect failed: {e}")
            return OperationResult.from_error(e)

        return OperationResult(
            success=True,
            message="Account loaded",
            account=self._summary(credential, record, len(vehicles)),
        )

    async def login_summary(self, credential: Credential) -> AccountSummary:
        """Summary for a fresh login; the player record is best-effort."""
        try:
            record = PlayerRecord.from_payload(await self.backend.fetch_player_record(credential.id_token))
        except FetchError as e:
            logger.warning(f"Player record unavailable after login: {e}")
            return self._summary(credential, None)
        return self._summary(credential, record)
