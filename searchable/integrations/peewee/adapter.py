"""Адаптер для интеграции с Peewee ORM.

Использует паттерн "Explicit Hook Injection" - внедряет хуки в методы
save(), delete_instance() и restore() модели через обертки. Работает с
обычной peewee.Model без наследования от SignalModel.

Классы:
    PeeweeAdapter
        Адаптер для автоматической индексации при изменениях ORM.

Функции:
    register_model(model, descriptor) -> None
        Регистрирует модель для автоматической индексации.
"""

from typing import TYPE_CHECKING, Any, Optional

from peewee import Model

from searchable.domain import LifecycleEvent
from searchable.utils.logger import get_logger

if TYPE_CHECKING:
    from searchable.integrations.base import SearchIndex

logger = get_logger(__name__)

# Дескрипторы SearchIndex, зарегистрированные на каждой модели
_MODEL_HOOKS: dict[type[Model], list["SearchIndex"]] = {}

# Модели, методы которых уже обернуты
_PATCHED_MODELS: set[type[Model]] = set()


def _nearest_patched(instance: Model) -> Optional[type[Model]]:
    for klass in type(instance).__mro__:
        if klass in _PATCHED_MODELS:
            return klass
    return None


def _descriptors_for(model_class: type[Model], instance: Model) -> list["SearchIndex"]:
    """Дескрипторы, которые должна уведомить обертка model_class.

    Обертка подкласса вызывает обертку родителя через исходный метод.
    События отдаёт только обертка ближайшего пропатченного класса в MRO
    инстанса, поэтому одна операция даёт одно событие.
    """
    if _nearest_patched(instance) is not model_class:
        return []
    return list(_MODEL_HOOKS.get(model_class, []))


def _fire(model_class: type[Model], event: LifecycleEvent, instance: Model) -> None:
    for descriptor in _descriptors_for(model_class, instance):
        descriptor.binder.notify(event, instance)


class PeeweeAdapter:
    """Адаптер событий Peewee для SearchIndex.

    На один успешный save() приходится ровно одно событие: created для
    новой строки, updated для существующей. delete_instance() даёт
    deleted после фактического удаления строки.

    Attributes:
        model: Класс Peewee модели.
        descriptor: Дескриптор SearchIndex.
    """

    def __init__(self, model: type[Model], descriptor: "SearchIndex"):
        self.model = model
        self.descriptor = descriptor

    def _apply_hooks(self) -> None:
        """Регистрирует дескриптор и патчит методы модели.

        Патчинг выполняется один раз на модель, даже если на ней
        несколько дескрипторов: все они вызываются из общих оберток.
        """
        descriptors = _MODEL_HOOKS.setdefault(self.model, [])
        if self.descriptor in descriptors:
            return
        descriptors.append(self.descriptor)

        if self.model not in _PATCHED_MODELS:
            _PATCHED_MODELS.add(self.model)
            self._patch_save()
            self._patch_delete()
            if callable(getattr(self.model, "restore", None)):
                self._patch_restore()

            logger.debug("Model hooks installed", model=self.model.__name__)

    def _patch_save(self) -> None:
        original_save = self.model.save
        model_class = self.model

        def save_wrapper(instance: Model, *args: Any, **kwargs: Any) -> int:
            force_insert = kwargs.get("force_insert", args[0] if args else False)
            is_new = bool(force_insert) or instance.get_id() is None

            result = original_save(instance, *args, **kwargs)

            if result:
                event = LifecycleEvent.CREATED if is_new else LifecycleEvent.UPDATED
                _fire(model_class, event, instance)

            return result

        self.model.save = save_wrapper

    def _patch_delete(self) -> None:
        original_delete = self.model.delete_instance
        model_class = self.model

        def delete_wrapper(instance: Model, *args: Any, **kwargs: Any) -> int:
            # Ключ и коллекция снимаются до удаления строки
            pending = []
            for descriptor in _descriptors_for(model_class, instance):
                action = descriptor.binder.prepare(LifecycleEvent.DELETED, instance)
                if action is not None:
                    pending.append((descriptor, action))

            result = original_delete(instance, *args, **kwargs)

            if result:
                for descriptor, action in pending:
                    descriptor.binder.deliver(LifecycleEvent.DELETED, instance, action)

            return result

        self.model.delete_instance = delete_wrapper

    def _patch_restore(self) -> None:
        original_restore = self.model.restore
        model_class = self.model

        def restore_wrapper(instance: Model, *args: Any, **kwargs: Any) -> Any:
            result = original_restore(instance, *args, **kwargs)

            # restore() без возвращаемого значения считается успешным
            if result is None or result:
                _fire(model_class, LifecycleEvent.RESTORED, instance)

            return result

        self.model.restore = restore_wrapper


def register_model(model: type[Model], descriptor: "SearchIndex") -> None:
    """Регистрирует модель Peewee для автоматической индексации.

    Args:
        model: Класс Peewee модели.
        descriptor: Дескриптор SearchIndex.
    """
    adapter = PeeweeAdapter(model=model, descriptor=descriptor)
    adapter._apply_hooks()


def unregister_model(model: type[Model]) -> None:
    """Отключает индексацию модели (обертки остаются, но ничего не вызывают)."""
    _MODEL_HOOKS.pop(model, None)
