"""
End-to-end tests through the HTTP routers.
"""
import uuid
from datetime import date, datetime, time, timedelta


def registerOwner(client, email="savio@goaselfdrive.in"):
    response = client.post("/owner/register", json={
        "fullName": "Savio Fernandes",
        "businessName": "Goa Self Drive",
        "email": email,
        "businessAddress": "18th June Road, Panjim"
    })
    assert response.status_code == 200
    return response.json()["id"]


def addVehicle(client, ownerId, registrationNo="GA-03-X-1234", modelName="Maruti Swift"):
    response = client.post(f"/vehicle/{ownerId}", json={
        "modelName": modelName,
        "registrationNo": registrationNo,
        "category": "Hatchback",
        "fuel": "Petrol",
        "transmission": "Manual",
        "dailyRate": 1800
    })
    assert response.status_code == 200
    return response.json()["id"]


def addDriver(client, ownerId, name="Suresh Kumar"):
    response = client.post(f"/driver/{ownerId}", json={
        "name": name,
        "phone": "9823012345",
        "licenseNo": "GA0120190012345"
    })
    assert response.status_code == 200
    return response.json()["id"]


def addBooking(client, ownerId, vehicleIds, daysAhead=1):
    pickupAt = datetime.combine(date.today() + timedelta(days=daysAhead), time(10, 0))
    response = client.post(f"/booking/{ownerId}", json={
        "customerName": "Timothy D'Souza",
        "pickupLocation": "Panjim Airport",
        "dropLocation": "Calangute Beach",
        "pickupAt": pickupAt.isoformat(),
        "dropAt": (pickupAt + timedelta(days=2)).isoformat(),
        "vehicles": [{"vehicleId": v, "quantity": 1, "rate": 1800} for v in vehicleIds],
        "totalAmount": 3600,
        "advanceAmount": 1000
    })
    assert response.status_code == 200
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"


# ============================================
# ONBOARDING
# ============================================

def test_onboarding_flow(client):
    ownerId = registerOwner(client)

    owner = client.get(f"/owner/{ownerId}").json()
    assert owner["baseLocation"] == "Panjim"
    assert owner["serviceLocations"] == ["Panjim"]
    assert owner["onboardingStep"] == 2

    response = client.put(f"/owner/{ownerId}/gst", json={"isGstEnabled": True, "gstNumber": ""})
    assert response.status_code == 400

    response = client.put(f"/owner/{ownerId}/gst", json={
        "isGstEnabled": True, "gstType": "Composition", "gstNumber": "30aabcu9603r1zm"
    })
    assert response.json()["gstNumber"] == "30AABCU9603R1ZM"
    assert response.json()["onboardingStep"] == 3

    response = client.put(f"/owner/{ownerId}/locations", json={
        "locations": ["Calangute", " Panjim ", "Calangute", "Margao"]
    })
    body = response.json()
    assert body["serviceLocations"] == ["Calangute", "Panjim", "Margao"]
    assert body["baseLocation"] == "Calangute"
    assert body["onboardingCompletedAt"] is not None


def test_duplicate_email_rejected(client):
    registerOwner(client)
    response = client.post("/owner/register", json={
        "fullName": "Someone Else", "businessName": "Other", "email": "savio@goaselfdrive.in"
    })
    assert response.status_code == 400


def test_unknown_owner(client):
    assert client.get(f"/owner/{uuid.uuid4()}").status_code == 404
    assert client.get("/owner/not-a-uuid").status_code == 422


# ============================================
# DRIVERS / VEHICLES / BOOKINGS
# ============================================

def test_driver_phone_and_status(client):
    ownerId = registerOwner(client)
    driverId = addDriver(client, ownerId)

    drivers = client.get(f"/driver/{ownerId}").json()
    assert drivers[0]["phone"] == "+91 9823012345"
    assert drivers[0]["currentLocation"] == "Not Assigned"
    assert drivers[0]["status"] == "active"

    response = client.put(f"/driver/{ownerId}/{driverId}/status", json={"status": "inactive"})
    assert response.json()["status"] == "inactive"
    assert client.get(f"/driver/{ownerId}", params={"status": "active"}).json() == []


def test_duplicate_registration_rejected(client):
    ownerId = registerOwner(client)
    addVehicle(client, ownerId)
    response = client.post(f"/vehicle/{ownerId}", json={
        "modelName": "Maruti Swift", "registrationNo": "ga-03-x-1234",
        "category": "Hatchback", "fuel": "Petrol", "transmission": "Manual"
    })
    assert response.status_code == 400


def test_booking_totals_and_transitions(client):
    ownerId = registerOwner(client)
    swift = addVehicle(client, ownerId)
    innova = addVehicle(client, ownerId, "GA-01-A-5678", "Toyota Innova")

    booking = addBooking(client, ownerId, [swift, innova])
    assert booking["status"] == "BOOKED"
    assert booking["vehiclesCount"] == 2
    assert booking["balanceAmount"] == 2600
    assert len(booking["details"]) == 2

    url = f"/booking/{ownerId}/{booking['id']}/status"
    assert client.put(url, json={"status": "COMPLETED"}).status_code == 400
    assert client.put(url, json={"status": "ONGOING"}).json()["status"] == "ONGOING"
    assert client.put(url, json={"status": "COMPLETED"}).json()["status"] == "COMPLETED"
    assert client.put(url, json={"status": "CANCELLED"}).status_code == 400


def test_booking_rejects_drop_before_pickup(client):
    ownerId = registerOwner(client)
    swift = addVehicle(client, ownerId)
    pickupAt = datetime.combine(date.today() + timedelta(days=1), time(10, 0))

    response = client.post(f"/booking/{ownerId}", json={
        "customerName": "Priya Nair",
        "pickupLocation": "Margao",
        "dropLocation": "Margao",
        "pickupAt": pickupAt.isoformat(),
        "dropAt": (pickupAt - timedelta(hours=1)).isoformat(),
        "vehicles": [{"vehicleId": swift}]
    })
    assert response.status_code == 400


def test_booking_accepts_mixed_timezone_input(client):
    ownerId = registerOwner(client)
    swift = addVehicle(client, ownerId)
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    dayAfter = (date.today() + timedelta(days=3)).isoformat()

    def post(pickupAt, dropAt):
        return client.post(f"/booking/{ownerId}", json={
            "customerName": "Priya Nair",
            "pickupLocation": "Margao",
            "dropLocation": "Margao",
            "pickupAt": pickupAt,
            "dropAt": dropAt,
            "vehicles": [{"vehicleId": swift}]
        })

    response = post(f"{tomorrow}T10:00:00Z", f"{dayAfter}T10:00:00")
    assert response.status_code == 200
    assert response.json()["pickupAt"] == f"{tomorrow}T10:00:00"

    response = post(f"{tomorrow}T12:00:00+05:30", f"{tomorrow}T07:00:00")
    assert response.status_code == 200
    assert response.json()["pickupAt"] == f"{tomorrow}T06:30:00"

    response = post(f"{tomorrow}T12:00:00+05:30", f"{tomorrow}T06:00:00")
    assert response.status_code == 400


def test_booking_payment(client):
    ownerId = registerOwner(client)
    swift = addVehicle(client, ownerId)
    booking = addBooking(client, ownerId, [swift])
    assert booking["advanceStatus"] == "pending"
    assert booking["balanceAmount"] == 2600
    url = f"/booking/{ownerId}/{booking['id']}/payment"

    partial = client.put(url, json={"method": "cash", "amount": 600}).json()
    assert partial["advanceStatus"] == "partial"
    assert partial["advancePaid"] == 600
    assert partial["balanceAmount"] == 3000

    paid = client.put(url, json={"method": "cash", "amount": 1000}).json()
    assert paid["advanceStatus"] == "paid"
    assert paid["balanceAmount"] == 2600

    upi = client.put(url, json={"method": "upi"}).json()
    assert upi["advanceStatus"] == "paid"
    assert upi["paymentMethod"] == "upi"
    assert upi["advancePaid"] == 1000

    assert client.put(url, json={"method": "cash"}).status_code == 400
    assert client.put(url, json={"method": "card"}).status_code == 422
    missing = f"/booking/{ownerId}/{uuid.uuid4()}/payment"
    assert client.put(missing, json={"method": "upi"}).status_code == 404

    client.put(f"/booking/{ownerId}/{booking['id']}/status", json={"status": "CANCELLED"})
    assert client.put(url, json={"method": "upi"}).status_code == 400


# ============================================
# ALLOCATION
# ============================================

def test_allocation_flow(client):
    ownerId = registerOwner(client)
    swift = addVehicle(client, ownerId)
    innova = addVehicle(client, ownerId, "GA-01-A-5678", "Toyota Innova")
    suresh = addDriver(client, ownerId)
    ramesh = addDriver(client, ownerId, "Ramesh Sawant")
    booking = addBooking(client, ownerId, [swift])
    detailId = booking["details"][0]["id"]

    legs = client.get(f"/allocation/{ownerId}/legs").json()
    assert [leg["legType"] for leg in legs] == ["Pick", "Drop"]
    assert not any(leg["isAllocated"] for leg in legs)

    candidates = client.get(f"/allocation/{ownerId}/candidates").json()
    assert {d["name"] for d in candidates["drivers"]} == {"Suresh Kumar", "Ramesh Sawant"}
    assert len(candidates["vehicles"]) == 2

    response = client.post(f"/allocation/{ownerId}/legs/{detailId}/Pick", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "No driver selected"

    response = client.post(f"/allocation/{ownerId}/legs/{detailId}/Pick", json={"driverId": suresh, "vehicleId": innova})
    assert response.status_code == 400

    response = client.post(f"/allocation/{ownerId}/legs/{detailId}/Pick", json={"driverId": suresh})
    assert response.status_code == 200
    assert response.json()["confirmed"] is True

    response = client.post(f"/allocation/{ownerId}/legs/{detailId}/Drop", json={"driverId": ramesh, "vehicleId": innova})
    assert response.json()["vehicleId"] == innova

    legs = client.get(f"/allocation/{ownerId}/legs").json()
    assert all(leg["isAllocated"] for leg in legs)
    pick, drop = legs
    assert pick["driverName"] == "Suresh Kumar"
    assert drop["driverName"] == "Ramesh Sawant"
    assert drop["registrationNo"] == "GA-01-A-5678"

    response = client.post(f"/allocation/{ownerId}/legs/{detailId}/Drop", json={"driverId": suresh})
    assert response.json()["vehicleId"] == innova

    filtered = client.get(f"/allocation/{ownerId}/legs", params={"legType": "Drop"}).json()
    assert len(filtered) == 1 and filtered[0]["driverName"] == "Suresh Kumar"


def test_allocation_preview_does_not_save(client):
    ownerId = registerOwner(client)
    swift = addVehicle(client, ownerId)
    innova = addVehicle(client, ownerId, "GA-01-A-5678", "Toyota Innova")
    suresh = addDriver(client, ownerId)
    detailId = addBooking(client, ownerId, [swift])["details"][0]["id"]

    response = client.post(
        f"/allocation/{ownerId}/legs/{detailId}/Drop/preview",
        json={"driverId": suresh, "vehicleId": innova}
    )
    preview = response.json()
    assert preview["isPendingEdit"] is True
    assert preview["driverName"] == "Suresh Kumar"
    assert preview["registrationNo"] == "GA-01-A-5678"
    assert preview["isAllocated"] is False

    legs = client.get(f"/allocation/{ownerId}/legs").json()
    assert not any(leg["isAllocated"] for leg in legs)


def test_allocation_unknown_leg(client):
    ownerId = registerOwner(client)
    suresh = addDriver(client, ownerId)

    response = client.post(f"/allocation/{ownerId}/legs/{uuid.uuid4()}/Pick", json={"driverId": suresh})
    assert response.status_code == 404

    response = client.post(f"/allocation/{ownerId}/legs/{uuid.uuid4()}/Return", json={"driverId": suresh})
    assert response.status_code == 422


def test_cancelled_booking_leaves_worklist(client):
    ownerId = registerOwner(client)
    swift = addVehicle(client, ownerId)
    booking = addBooking(client, ownerId, [swift])

    client.put(f"/booking/{ownerId}/{booking['id']}/status", json={"status": "CANCELLED"})

    assert client.get(f"/allocation/{ownerId}/legs").json() == []


# ============================================
# REMINDERS
# ============================================

def addReminder(client, ownerId, vehicleId, dueDate, category="Maintenance", kind="Scheduled Service"):
    response = client.post(f"/reminder/{ownerId}", json={
        "vehicleId": vehicleId,
        "type": kind,
        "category": category,
        "priority": "High",
        "dueDate": dueDate.isoformat()
    })
    assert response.status_code == 200
    return response.json()


def test_reminder_status_and_summary(client):
    ownerId = registerOwner(client)
    swift = addVehicle(client, ownerId)
    today = date.today()

    overdue = addReminder(client, ownerId, swift, today - timedelta(days=5), "Critical", "Insurance Renewal")
    dueSoon = addReminder(client, ownerId, swift, today + timedelta(days=7))
    upcoming = addReminder(client, ownerId, swift, today + timedelta(days=8), "Financial", "EMI Payment")

    assert overdue["status"] == "Overdue" and overdue["daysRemaining"] == -5
    assert dueSoon["status"] == "Due Soon"
    assert upcoming["status"] == "Upcoming"
    assert overdue["vehicle"] == "GA-03-X-1234"

    done = client.put(f"/reminder/{ownerId}/{overdue['id']}/complete").json()
    assert done["status"] == "Completed" and done["daysRemaining"] == 0

    summary = client.get(f"/reminder/{ownerId}/summary").json()
    assert summary == {"overdue": 0, "dueSoon": 1, "upcoming": 1, "completed": 1}

    found = client.get(f"/reminder/{ownerId}", params={"search": "emi"}).json()
    assert [r["id"] for r in found] == [upcoming["id"]]
    found = client.get(f"/reminder/{ownerId}", params={"status": "Due Soon"}).json()
    assert [r["id"] for r in found] == [dueSoon["id"]]


def test_reminder_snooze(client):
    ownerId = registerOwner(client)
    swift = addVehicle(client, ownerId)
    today = date.today()
    reminder = addReminder(client, ownerId, swift, today + timedelta(days=2))

    snoozed = client.put(f"/reminder/{ownerId}/{reminder['id']}/snooze", json={"days": 7}).json()
    assert snoozed["dueDate"] == (today + timedelta(days=9)).isoformat()
    assert snoozed["status"] == "Upcoming"

    client.put(f"/reminder/{ownerId}/{reminder['id']}/complete")
    response = client.put(f"/reminder/{ownerId}/{reminder['id']}/snooze", json={"days": 7})
    assert response.status_code == 400


# ============================================
# HANDOVERS
# ============================================

def addHandover(client, ownerId, vehicleId, customerName="Timothy D'Souza", odometerOut=24500):
    checkoutAt = datetime.combine(date.today(), time(10, 30))
    response = client.post(f"/handover/{ownerId}", json={
        "vehicleId": vehicleId,
        "customerName": customerName,
        "location": "Panjim Airport",
        "checkoutAt": checkoutAt.isoformat(),
        "returnAt": (checkoutAt + timedelta(hours=7)).isoformat(),
        "fuelLevel": 75,
        "odometerOut": odometerOut
    })
    assert response.status_code == 200
    return response.json()


def test_handover_lifecycle(client):
    ownerId = registerOwner(client)
    swift = addVehicle(client, ownerId)
    handover = addHandover(client, ownerId, swift)

    assert handover["status"] == "Pending"
    assert handover["registration"] == "GA-03-X-1234"
    assert len(handover["checklist"]) == 6
    assert handover["checklistDone"] == 0

    toggled = client.put(f"/handover/{ownerId}/{handover['id']}/checklist/1").json()
    assert toggled["checklist"][1] == {"label": "Odometer Reading", "checked": True}
    assert toggled["checklistDone"] == 1
    toggled = client.put(f"/handover/{ownerId}/{handover['id']}/checklist/1").json()
    assert toggled["checklistDone"] == 0
    assert client.put(f"/handover/{ownerId}/{handover['id']}/checklist/6").status_code == 400

    url = f"/handover/{ownerId}/{handover['id']}/status"
    assert client.put(url, json={"status": "Returned", "odometerIn": 24800}).status_code == 400
    assert client.put(url, json={"status": "Checked Out"}).json()["status"] == "Checked Out"
    assert client.put(url, json={"status": "Returned"}).status_code == 400
    assert client.put(url, json={"status": "Returned", "odometerIn": 24000}).status_code == 400

    returned = client.put(url, json={"status": "Returned", "odometerIn": 24780, "fuelLevel": 40}).json()
    assert returned["status"] == "Returned"
    assert returned["odometerIn"] == 24780
    assert returned["fuelLevel"] == 40
    assert client.put(url, json={"status": "Pending"}).status_code == 400


def test_handover_search_and_summary(client):
    ownerId = registerOwner(client)
    swift = addVehicle(client, ownerId)
    creta = addVehicle(client, ownerId, "GA-12-A-1234", "Hyundai Creta")
    first = addHandover(client, ownerId, swift)
    second = addHandover(client, ownerId, creta, "Priya Nair", 18230)
    client.put(f"/handover/{ownerId}/{second['id']}/status", json={"status": "Checked Out"})

    found = client.get(f"/handover/{ownerId}", params={"search": "creta"}).json()
    assert [h["id"] for h in found] == [second["id"]]
    found = client.get(f"/handover/{ownerId}", params={"search": "ga-03"}).json()
    assert [h["id"] for h in found] == [first["id"]]
    found = client.get(f"/handover/{ownerId}", params={"search": "timothy", "status": "Checked Out"}).json()
    assert found == []

    summary = client.get(f"/handover/{ownerId}/summary").json()
    assert summary == {"pending": 1, "checkedOut": 1, "returned": 0}


def test_handover_rejects_foreign_vehicle(client):
    ownerId = registerOwner(client)
    otherId = registerOwner(client, "other@goarentals.in")
    foreign = addVehicle(client, otherId)

    response = client.post(f"/handover/{ownerId}", json={
        "vehicleId": foreign,
        "customerName": "Rahul Mehta",
        "location": "Margao",
        "checkoutAt": datetime.combine(date.today(), time(9, 0)).isoformat(),
        "odometerOut": 31000
    })
    assert response.status_code == 400
    assert client.put(f"/handover/{ownerId}/{uuid.uuid4()}/status", json={"status": "Checked Out"}).status_code == 404
