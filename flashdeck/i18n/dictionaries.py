from typing import Dict, Union

Dictionary = Dict[str, Union[str, "Dictionary"]]

# "errors" renders API failures; the other sections are UI text served
# to clients by GET /locale/messages.

en: Dictionary = {
    "common": {
        "cancel": "Cancel",
        "generate": "Generate",
        "save": "Save",
    },
    "study": {
        "title": "Study Mode",
        "complete": "Study Complete!",
        "studyAgain": "Study Again",
        "shuffle": "Shuffle",
        "shuffled": "Shuffled",
        "reset": "Reset",
        "emptyDeck": "This deck has no cards yet. Add some cards to start studying.",
    },
    "csv": {
        "imported": "Cards imported",
        "fileHint": "One card per line: front,back. Lines starting with # are ignored.",
    },
    "ai": {
        "generated": "Cards generated",
        "between": "Between 1 and 200 cards",
        "needTitleDesc": "Add a title and description to enable AI generation",
        "upgradeToUseAI": "Upgrade your plan to generate cards with AI",
    },
    "errors": {
        "unauthorized": "You must be signed in to do that.",
        "forbidden": "You do not have access to this resource.",
        "not_found": "The requested resource was not found.",
        "deck_not_found": "Deck not found or not authorized.",
        "card_not_found": "Card not found or not authorized.",
        "invalid_input": "Invalid input. Please check the form and try again.",
        "user_exists": "A user with this email already exists.",
        "conflict": "That change conflicts with existing data.",
        "invalid_credentials": "Incorrect email or password.",
        "csv_no_valid_rows": "No valid cards were found in the CSV file.",
        "csv_decode_failed": "The CSV file could not be read. Please upload UTF-8 text.",
        "feature_not_entitled": "AI generation is not enabled for your plan.",
        "missing_title_or_description": "Deck title and description are required for AI generation.",
        "provider_not_configured": "The AI provider is not configured.",
        "quota_exceeded": "AI quota exceeded. Please check your plan and billing and try again later.",
        "malformed_output": "The AI returned an unexpected response. Please try again.",
        "insufficient_cards": "The AI returned fewer cards than requested. No cards were added.",
        "generation_failed": "Failed to generate cards. Please try again.",
        "unexpected": "Something went wrong. Please try again.",
    },
}

zh_tw: Dictionary = {
    "common": {
        "cancel": "取消",
        "generate": "產生",
        "save": "儲存",
    },
    "study": {
        "title": "學習模式",
        "complete": "學習完成！",
        "studyAgain": "再學一次",
        "shuffle": "隨機排序",
        "shuffled": "已隨機排序",
        "reset": "重設",
        "emptyDeck": "這個牌組還沒有卡片。新增卡片後即可開始學習。",
    },
    "csv": {
        "imported": "已匯入卡片",
        "fileHint": "每行一張卡片：正面,背面。以 # 開頭的行會被忽略。",
    },
    "ai": {
        "generated": "已產生卡片",
        "between": "介於 1 到 200 張卡片",
        "needTitleDesc": "請先填寫標題與描述以啟用 AI 產生",
        "upgradeToUseAI": "升級方案即可使用 AI 產生卡片",
    },
    "errors": {
        "unauthorized": "請先登入。",
        "forbidden": "你沒有存取此資源的權限。",
        "not_found": "找不到要求的資源。",
        "deck_not_found": "找不到牌組或沒有權限。",
        "card_not_found": "找不到卡片或沒有權限。",
        "invalid_input": "輸入無效，請檢查後再試一次。",
        "user_exists": "此電子郵件已被註冊。",
        "conflict": "此變更與現有資料衝突。",
        "invalid_credentials": "電子郵件或密碼錯誤。",
        "csv_no_valid_rows": "CSV 檔案中沒有有效的卡片。",
        "csv_decode_failed": "無法讀取 CSV 檔案，請上傳 UTF-8 文字檔。",
        "feature_not_entitled": "你的方案未開放 AI 產生功能。",
        "missing_title_or_description": "使用 AI 產生前需要牌組標題與描述。",
        "provider_not_configured": "尚未設定 AI 服務。",
        "quota_exceeded": "AI 配額已用完，請檢查方案與帳單後再試。",
        "malformed_output": "AI 回傳了非預期的內容，請再試一次。",
        "insufficient_cards": "AI 回傳的卡片少於要求的數量，未新增任何卡片。",
        "generation_failed": "產生卡片失敗，請再試一次。",
        "unexpected": "發生錯誤，請再試一次。",
    },
}

DICTIONARIES: Dict[str, Dictionary] = {
    "en": en,
    "zh-TW": zh_tw,
}
