"""
Leg Resolver

Turns booking details and allocation rows into the allocation worklist:
1. Every booking detail becomes two legs (Pick, Drop)
2. Each leg is annotated from the allocation row for its
   (booking_detail_id, type), if any
3. Unallocated legs sort first, then by the leg's own time

All functions here are pure: they never touch the session and never
mutate their inputs.
"""
import logging
import warnings
from typing import Dict, Iterable, List, Optional, Tuple

from fleetdesk.errors import DataConsistencyWarning
from fleetdesk.schemas.allocation import BookingLine, Leg, LegType, PendingEdit

logger = logging.getLogger(__name__)

LegKey = Tuple[str, str]


def leg_key(booking_detail_id, leg_type) -> LegKey:
    """Identity of a leg: (booking detail id, "Pick" | "Drop")."""
    if isinstance(leg_type, LegType):
        leg_type = leg_type.value
    return str(booking_detail_id), leg_type


def build_allocation_lookup(allocations: Iterable) -> Dict[LegKey, object]:
    """
    Index allocation rows by leg identity.

    Duplicates should be impossible (unique constraint), but rows written
    before the constraint existed must not break the worklist: the later
    row in input order wins and a DataConsistencyWarning is emitted.
    """
    lookup = {}
    for allocation in allocations:
        key = leg_key(allocation.booking_detail_id, allocation.type)
        if key in lookup:
            message = (
                f"Duplicate allocation for booking detail {key[0]} ({key[1]}): "
                f"keeping {allocation.id}, ignoring {lookup[key].id}"
            )
            logger.warning(message)
            warnings.warn(message, DataConsistencyWarning, stacklevel=2)
        lookup[key] = allocation
    return lookup


def _index_by_id(rows: Iterable) -> Dict[str, object]:
    return {str(row.id): row for row in rows}


def _make_leg(line: BookingLine, leg_type: LegType) -> Leg:
    if leg_type == LegType.PICK:
        location, when = line.pickupLocation, line.pickupAt
    else:
        location, when = line.dropLocation, line.dropAt

    return Leg(
        bookingDetailId=line.bookingDetailId,
        bookingId=line.bookingId,
        legType=leg_type,
        customerName=line.customerName,
        vehicleId=line.vehicleId,
        vehicleName=line.vehicleName,
        registrationNo=line.registrationNo,
        vehicleCategory=line.vehicleCategory,
        fuel=line.fuel,
        transmission=line.transmission,
        bookedVehicleId=line.vehicleId,
        location=location,
        dateTime=when,
    )


def _annotate(leg: Leg, allocation, drivers: Dict[str, object], vehicles: Dict[str, object]) -> Leg:
    driver_id = str(allocation.driver_id)
    driver = drivers.get(driver_id)
    updates = {
        "isAllocated": True,
        "allocationId": str(allocation.id),
        "confirmed": bool(allocation.confirmed),
        "driverId": driver_id,
        "driverName": driver.full_name if driver else None,
    }

    # Pick legs always use the booked vehicle
    if leg.legType == LegType.DROP and allocation.vehicle_id is not None:
        vehicle_id = str(allocation.vehicle_id)
        vehicle = vehicles.get(vehicle_id)
        updates["allocatedVehicleId"] = vehicle_id
        updates["vehicleId"] = vehicle_id
        if vehicle:
            updates["allocatedRegistrationNo"] = vehicle.registration_no
            updates["registrationNo"] = vehicle.registration_no
            updates["vehicleName"] = vehicle.model_name
            updates["vehicleCategory"] = vehicle.category
            updates["fuel"] = vehicle.fuel
            updates["transmission"] = vehicle.transmission

    return leg.model_copy(update=updates)


def derive_legs(
    lines: Iterable[BookingLine],
    allocations: Iterable,
    drivers: Iterable = (),
    vehicles: Iterable = ()
) -> List[Leg]:
    """
    Build the Pick and Drop legs for every booking line.

    drivers / vehicles are only used to resolve display names of the
    allocated driver and of a reallocated Drop vehicle.
    """
    lookup = build_allocation_lookup(allocations)
    driver_index = _index_by_id(drivers)
    vehicle_index = _index_by_id(vehicles)

    legs = []
    for line in lines:
        for leg_type in (LegType.PICK, LegType.DROP):
            leg = _make_leg(line, leg_type)
            allocation = lookup.get(leg_key(line.bookingDetailId, leg_type))
            if allocation is not None:
                leg = _annotate(leg, allocation, driver_index, vehicle_index)
            legs.append(leg)
    return legs


def sort_legs(legs: Iterable[Leg]) -> List[Leg]:
    """Unallocated first, then earliest time first. Stable for equal keys."""
    return sorted(legs, key=lambda leg: (leg.isAllocated, leg.dateTime))


def apply_pending_edit(
    leg: Leg,
    edit: Optional[PendingEdit],
    drivers: Iterable = (),
    vehicles: Iterable = ()
) -> Leg:
    """
    Overlay an unsaved driver / vehicle selection on a derived leg for
    display. The result is marked isPendingEdit and is never written back.
    """
    if edit is None or (edit.driverId is None and edit.vehicleId is None):
        return leg

    updates = {"isPendingEdit": True}

    if edit.driverId is not None:
        driver = _index_by_id(drivers).get(edit.driverId)
        updates["driverId"] = edit.driverId
        updates["driverName"] = driver.full_name if driver else None

    if edit.vehicleId is not None and leg.legType == LegType.DROP:
        vehicle = _index_by_id(vehicles).get(edit.vehicleId)
        updates["vehicleId"] = edit.vehicleId
        updates["allocatedVehicleId"] = edit.vehicleId
        if vehicle:
            updates["vehicleName"] = vehicle.model_name
            updates["registrationNo"] = vehicle.registration_no
            updates["allocatedRegistrationNo"] = vehicle.registration_no

    return leg.model_copy(update=updates)


def _matches_search(leg: Leg, needle: str) -> bool:
    haystack = (
        leg.driverName,
        leg.vehicleName,
        leg.registrationNo,
        leg.customerName,
        leg.location,
    )
    return any(value and needle in value.lower() for value in haystack)


def filter_legs(
    legs: Iterable[Leg],
    search: Optional[str] = None,
    leg_type: Optional[LegType] = None,
    allocated: Optional[bool] = None
) -> List[Leg]:
    """Worklist search box and tabs. Keeps the input order."""
    needle = search.strip().lower() if search else ""
    result = []
    for leg in legs:
        if leg_type is not None and leg.legType != leg_type:
            continue
        if allocated is not None and leg.isAllocated != allocated:
            continue
        if needle and not _matches_search(leg, needle):
            continue
        result.append(leg)
    return result
