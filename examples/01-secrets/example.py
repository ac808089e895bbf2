import logging

import lot


class Secret(lot.Body):
    resource = lot.Resource('', 'v1', 'secrets', kind='Secret', namespaced=True)


class ServiceAccount(lot.Body):
    resource = lot.Resource('', 'v1', 'serviceaccounts', kind='ServiceAccount', namespaced=True)


class ConfigMap(lot.Body):
    resource = lot.Resource('', 'v1', 'configmaps', kind='ConfigMap', namespaced=True)


class LoggingRuntime:
    """
    A stand-in for a real watch runtime: it only shows what it would watch.
    """

    def __init__(self):
        self.controllers = []

    def register(self, controller):
        self.controllers.append(controller)

    async def run(self):
        for controller in self.controllers:
            owned = ', '.join(repr(owned.kind) for owned in controller.owns)
            logging.info(f"Would watch {controller.kind!r} owning [{owned}].")


everything = lot.Funcs.from_object_fn(lambda obj: True)

operator = lot.Operator.typed(Secret, config=lot.OperatorConfig(
    runtime=LoggingRuntime(),
    owns=[
        lot.OwnedResource(kind=lot.Typed(ServiceAccount), predicate=everything),
        lot.OwnedResource(kind=lot.Typed(ConfigMap), predicate=everything),
    ],
))


@operator.on_create_or_update(labels={'foo': 'bar', 'important': lot.PRESENT})
async def create_or_update_fn(name, namespace, client, logger, **_):
    logger.info(f"Reconciling the created/updated object {namespace}/{name}.")
    if name == 'delete-test-secret':
        secret = await client.fetch(lot.ObjectKey(name=name, namespace=namespace), Secret())
        logger.info(f"Object found with {len(secret.get('data', {}))} data keys.")


@operator.on_delete(annotations={'keepresource': lot.ABSENT}, labels={'foo': 'bar'})
async def delete_fn(body, name, namespace, client, logger, **_):
    if not body.deletion_timestamp:
        return
    logger.info(f"Reconciling the deleted object {namespace}/{name}.")
    try:
        await client.fetch(lot.ObjectKey(name=name, namespace=namespace), Secret())
    except lot.APINotFoundError:
        logger.info("Not found, so proceed doing something else...")
        raise
    logger.info("Curious... the object is still here.")
