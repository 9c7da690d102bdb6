from soft_delete_core.operations.descriptor import Action, OperationDescriptor


def test_action_accepts_wire_names() -> None:
    descriptor = OperationDescriptor(
        model="Post",
        action="deleteMany",  # type: ignore[arg-type]
    )

    assert descriptor.action is Action.DELETE_MANY
    assert descriptor.action == "deleteMany"


def test_defaults() -> None:
    descriptor = OperationDescriptor(model="Post", action=Action.FIND_MANY)

    assert descriptor.args == {}
    assert descriptor.run_in_transaction is False


def test_action_covers_pass_through_kinds() -> None:
    for wire_name in ("aggregate", "groupBy", "findUniqueOrThrow", "queryRaw"):
        descriptor = OperationDescriptor(
            model="Post",
            action=wire_name,  # type: ignore[arg-type]
        )

        assert descriptor.action.value == wire_name


def test_copy_is_deep() -> None:
    descriptor = OperationDescriptor(
        model="Post", action=Action.DELETE, args={"where": {"id": 1}}
    )

    clone = descriptor.copy()
    clone.args["where"]["id"] = 2

    assert descriptor.args["where"] == {"id": 1}
    assert str(descriptor) == "Post.delete"
