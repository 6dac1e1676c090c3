from delve.entities.components.physics_component import MovingEntity
from delve.systems.spawn_queue import SpawnQueue, SpawnRequest


def make(request):
    return MovingEntity(position=request.position, velocity=request.velocity, kind=request.kind)


def test_apply_adds_requested_entities_in_order():
    queue = SpawnQueue()
    queue.request(SpawnRequest("basic", (10.0, 10.0)))
    queue.extend([SpawnRequest("spinner", (20.0, 0.0)), SpawnRequest("bullet", (0.0, 0.0), (3.0, 0.0))])
    entities = []

    created = queue.apply(entities, make)

    assert [e.kind for e in created] == ["basic", "spinner", "bullet"]
    assert entities == created
    assert created[2].velocity.x == 3.0
    assert len(queue) == 0


def test_despawn_removes_by_identity():
    a = MovingEntity(position=(0, 0), kind="bullet")
    b = MovingEntity(position=(0, 0), kind="bullet")
    entities = [a, b]
    queue = SpawnQueue()
    queue.despawn(a)
    queue.despawn(a)
    assert len(queue) == 1

    queue.apply(entities, make)
    assert entities == [b]
    assert entities[0] is b


def test_apply_mutates_list_in_place():
    entities = [MovingEntity(position=(0, 0))]
    alias = entities
    queue = SpawnQueue()
    queue.despawn(entities[0])
    queue.request(SpawnRequest("exit", (1.0, 1.0)))
    queue.apply(entities, make)
    assert alias is entities
    assert [e.kind for e in alias] == ["exit"]


def test_requests_wait_for_apply():
    queue = SpawnQueue()
    queue.request(SpawnRequest("basic", (0.0, 0.0)))
    assert queue.pending_spawns == [SpawnRequest("basic", (0.0, 0.0))]
    queue.clear()
    assert queue.apply([], make) == []
