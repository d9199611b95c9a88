"""JavaScript evaluated inside the WhatsApp Web page.

The page owns the messaging protocol; these snippets only read its login state
and call into the page's own module registry (``window.require``) to resolve
numbers and submit text. Module names track WhatsApp Web releases.
"""

from __future__ import annotations

LOGIN_STATE_SCRIPT = """
() => {
  const qr = document.querySelector('div[data-ref]');
  if (qr && qr.getAttribute('data-ref')) {
    return { state: 'pairing', code: qr.getAttribute('data-ref') };
  }
  if (document.querySelector('#pane-side')) {
    let injected = false;
    try {
      injected = typeof window.require === 'function' && !!window.require('WAWebCollections');
    } catch (e) {
      injected = false;
    }
    return { state: 'main', injected };
  }
  const progress = document.querySelector('progress');
  if (progress) {
    return { state: 'loading', percent: Number(progress.value) || 0 };
  }
  return { state: 'unknown' };
}
"""

RESOLVE_SCRIPT = """
async (number) => {
  const wid = window.require('WAWebWidFactory').createWid(`${number}@c.us`);
  const result = await window.require('WAWebQueryExistsJob').queryWidExists(wid);
  if (!result || !result.wid) {
    return null;
  }
  return result.wid._serialized;
}
"""

IS_REGISTERED_SCRIPT = """
async (chatId) => {
  const wid = window.require('WAWebWidFactory').createWid(chatId);
  const result = await window.require('WAWebQueryExistsJob').queryWidExists(wid);
  return !!(result && result.wid);
}
"""

SEND_TEXT_SCRIPT = """
async ({ chatId, body }) => {
  const wid = window.require('WAWebWidFactory').createWid(chatId);
  const found = await window.require('WAWebFindChatAction').findOrCreateLatestChat(wid);
  const chat = found && found.chat ? found.chat : found;
  if (!chat) {
    throw new Error(`chat ${chatId} not found`);
  }
  const msg = await window.require('WAWebSendTextMsgChatAction').sendTextMsgToChat(chat, body, {});
  return msg && msg.id ? msg.id._serialized || null : null;
}
"""

__all__ = [
    "IS_REGISTERED_SCRIPT",
    "LOGIN_STATE_SCRIPT",
    "RESOLVE_SCRIPT",
    "SEND_TEXT_SCRIPT",
]
