from dishka import provide

from limbo.domain.notification.command.submit_inquiry import SubmitInquiryHandler
from limbo.domain.notification.query.get_artist_status import GetArtistStatusHandler
from limbo.domain.notification.service.dispatcher import NotificationDispatcher
from limbo.util.di.base import Provider
from limbo.util.di.scope import Scope


class NotificationProvider(Provider):
    # Services
    dispatcher = provide(NotificationDispatcher, scope=Scope.APP)

    # Command Handlers
    submit_inquiry_handler = provide(SubmitInquiryHandler, scope=Scope.UOW)

    # Query Handlers
    get_artist_status_handler = provide(GetArtistStatusHandler, scope=Scope.UOW)
