from costume_rental.models import ItemStatus, ItemType


async def test_service_info(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["message"]


async def test_costumes_exclude_accessories(client, make_item):
    costume = await make_item(name="Ganesha Costume")
    await make_item(name="Peacock Feather Crown", item_type=ItemType.ACCESSORY)

    response = await client.get("/api/costumes")

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [costume.id]


async def test_accessories_list(client, make_item):
    await make_item(name="Ganesha Costume")
    crown = await make_item(name="Peacock Feather Crown", item_type=ItemType.ACCESSORY)

    response = await client.get("/api/accessories")

    assert [item["name"] for item in response.json()] == [crown.name]


async def test_filters_are_exact_and_combined(client, make_item):
    match = await make_item(name="Radha Costume", size="M", theme="Mythology")
    await make_item(name="Radha Costume Kids", size="S", theme="Mythology")
    await make_item(name="Pirate Costume", size="M", theme="Adventure")

    response = await client.get("/api/costumes", params={"size": "M", "theme": "Mythology"})

    assert [item["id"] for item in response.json()] == [match.id]


async def test_filter_by_size_is_case_sensitive(client, make_item):
    await make_item(size="M")

    response = await client.get("/api/costumes", params={"size": "m"})

    assert response.json() == []


async def test_filter_by_category(client, make_item, costume_category):
    categorized = await make_item(name="Holi Outfit", category_id=costume_category.id)
    await make_item(name="Plain Kurta")

    response = await client.get("/api/costumes", params={"category": costume_category.id})

    data = response.json()
    assert [item["id"] for item in data] == [categorized.id]
    assert data[0]["category"]["name"] == costume_category.name


async def test_filter_by_status(client, make_item):
    await make_item(name="Rented Costume", status=ItemStatus.RENTED)
    available = await make_item(name="Free Costume")

    response = await client.get("/api/costumes", params={"status": "available"})

    assert [item["id"] for item in response.json()] == [available.id]


async def test_search_matches_name_and_description(client, make_item):
    by_name = await make_item(name="Lord Vishnu")
    by_description = await make_item(name="Blue Robe", description="Worn as VISHNU")
    await make_item(name="Shiva Costume")

    response = await client.get("/api/costumes", params={"search": "vishnu"})

    assert {item["id"] for item in response.json()} == {by_name.id, by_description.id}


async def test_invalid_status_filter(client):
    response = await client.get("/api/costumes", params={"status": "lost"})
    assert response.status_code == 422


async def test_costume_detail(client, make_item):
    costume = await make_item(name="Lakshmi Costume", id="c1")

    response = await client.get("/api/costumes/c1")

    assert response.status_code == 200
    assert response.json()["id"] == costume.id


async def test_costume_detail_rejects_accessory(client, make_item):
    crown = await make_item(name="Crown", item_type=ItemType.ACCESSORY)

    response = await client.get(f"/api/costumes/{crown.id}")

    assert response.status_code == 404
    assert response.json()["error_type"] == "entity_not_found"


async def test_accessory_detail_missing(client):
    response = await client.get("/api/accessories/missing")
    assert response.status_code == 404


async def test_categories_by_type(client, costume_category):
    response = await client.get("/api/categories", params={"type": "costume"})
    assert [c["name"] for c in response.json()] == [costume_category.name]

    response = await client.get("/api/categories", params={"type": "accessory"})
    assert response.json() == []
